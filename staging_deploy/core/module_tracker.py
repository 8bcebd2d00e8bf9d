"""Last module detection"""

from typing import List

from ..api.exceptions import ModuleNotFoundInBuildError
from ..models.build import ModuleInfo


class LastModuleDetector:
    """Tells whether a module is the last one in build order that runs staging

    The answer is computed from the module list alone, so it needs no
    callback from the build tool after all modules have finished.
    """

    def is_last(self, modules: List[ModuleInfo], current_module_id: str) -> bool:
        """
        Check if the current module is the last staging-enabled module

        Args:
            modules: Modules in build order
            current_module_id: Id of the executing module

        Returns:
            True if no staging-enabled module follows the current one
        """
        position = None
        for index, module in enumerate(modules):
            if module.id == current_module_id:
                position = index
                break

        if position is None:
            raise ModuleNotFoundInBuildError(current_module_id)

        return not any(m.staging_enabled for m in modules[position + 1:])
