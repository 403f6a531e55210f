"""Modules of the agent and the scheduling of their runs."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


class Module(abc.ABC):
    """A unit of collection work, run after the modules it depends on."""

    name: str = ""
    dependencies: Sequence[str] = ()

    @abc.abstractmethod
    def run(self) -> None:
        """Do the collection work; raise on failure."""


@dataclass
class ModuleError:
    """The failure of one module."""

    module: str
    message: str


class SchedulingError(Exception):
    """The modules cannot be arranged into a run."""


Status = dict[str, Optional[BaseException]]


class Scheduler:
    """Orders modules by their dependencies and runs them."""

    def __init__(self, modules: Iterable[Module]):
        self.modules = list(modules)

    def get_module_by_name(self, name: str) -> Optional[Module]:
        """Return the module with that name, or None."""
        return next((module for module in self.modules if module.name == name), None)

    def check_missing_dependencies(self) -> None:
        """Raise SchedulingError when a dependency is not among the modules."""
        for module in self.modules:
            for dependency in module.dependencies:
                if self.get_module_by_name(dependency) is None:
                    raise SchedulingError(
                        f"module {module.name} needs {dependency} which is missing"
                    )

    def build_tasks_list(self) -> list[Module]:
        """Return the modules so that each comes after its dependencies."""
        tasks: list[Module] = []
        added: set[str] = set()
        while len(tasks) < len(self.modules):
            progress = False
            for module in self.modules:
                if module.name in added:
                    continue
                if all(dependency in added for dependency in module.dependencies):
                    added.add(module.name)
                    tasks.append(module)
                    progress = True
            if not progress:
                raise SchedulingError("module dependency error (there is probably a cycle)")
        return tasks

    def run(self) -> Status:
        """Run every module in order and return the failure of each (None on success).

        Raises SchedulingError only when the modules cannot be planned.
        """
        logger.info("Checking dependencies")
        self.check_missing_dependencies()
        logger.info("Scheduling tasks")
        tasks = self.build_tasks_list()

        status: Status = {}
        for task in tasks:
            logger.info("Running module %s", task.name)
            try:
                task.run()
            except Exception as exc:
                status[task.name] = exc
            else:
                status[task.name] = None
        return status


class ModuleRegistry:
    """The available modules and the status of their last run."""

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}
        self._status: Status = {}

    def register(self, module: Module) -> Module:
        """Add a module, replacing one with the same name."""
        self._modules[module.name] = module
        return module

    def __getitem__(self, name: str) -> Module:
        return self._modules[name]

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self):
        return iter(self._modules.values())

    def names(self) -> list[str]:
        """Return the sorted names of all the modules."""
        return sorted(self._modules)

    def enabled(self, disabled: Optional[Iterable[str]] = None) -> list[Module]:
        """Return the modules whose names are not in `disabled`."""
        skipped = set(disabled or ())
        return [module for name, module in self._modules.items() if name not in skipped]

    def run(self, disabled: Optional[Iterable[str]] = None) -> Status:
        """Run the enabled modules; the status of every registered module is reset first."""
        self._status = {name: None for name in self._modules}
        self._status.update(Scheduler(self.enabled(disabled)).run())
        return dict(self._status)

    def module_errors(self) -> list[ModuleError]:
        """Return the errors raised by modules during the last run."""
        return [
            ModuleError(module=name, message=str(error))
            for name, error in self._status.items()
            if error is not None
        ]