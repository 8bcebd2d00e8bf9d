"""Build context models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from .artifact import Artifact, ProjectDeployUnit
from ..constants import DESCRIPTOR_EXTENSION, DESCRIPTOR_PACKAGING


@dataclass
class ModuleInfo:
    """One module of a multi-module build"""

    id: str
    unit: ProjectDeployUnit

    # False for modules that do not run the staging workflow at all
    staging_enabled: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Path) -> 'ModuleInfo':
        """Create from a build descriptor entry"""
        packaging = data.get("packaging", "jar")
        default_extension = DESCRIPTOR_EXTENSION if packaging == DESCRIPTOR_PACKAGING else packaging

        primary = Artifact.from_dict(
            {
                "group_id": data["group_id"],
                "artifact_id": data["artifact_id"],
                "version": data["version"],
                "extension": data.get("extension", default_extension),
                "file": data.get("file"),
            },
            base_dir,
        )

        descriptor = Path(data["descriptor"])
        if not descriptor.is_absolute():
            descriptor = base_dir / descriptor

        unit = ProjectDeployUnit(artifact=primary, packaging=packaging, descriptor_file=descriptor)
        for entry in data.get("attached", []) or []:
            unit.attach(Artifact.from_dict(
                {
                    "group_id": entry.get("group_id", data["group_id"]),
                    "artifact_id": entry.get("artifact_id", data["artifact_id"]),
                    "version": entry.get("version", data["version"]),
                    "extension": entry.get("extension", "jar"),
                    "classifier": entry.get("classifier"),
                    "file": entry.get("file"),
                },
                base_dir,
            ))

        module_id = data.get("id") or f"{data['group_id']}:{data['artifact_id']}"
        return cls(id=module_id, unit=unit, staging_enabled=data.get("staging", True))


@dataclass
class BuildContext:
    """Read-only view of the build: ordered modules and their deployables"""

    modules: List[ModuleInfo] = field(default_factory=list)
    root: Optional[Path] = None

    @property
    def module_ids(self) -> List[str]:
        """Get module ids in build order"""
        return [m.id for m in self.modules]

    def get_module(self, module_id: str) -> Optional[ModuleInfo]:
        """Get module by id"""
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Path) -> 'BuildContext':
        """Create from the build descriptor structure"""
        modules = [ModuleInfo.from_dict(entry, base_dir) for entry in data.get("modules", [])]
        return cls(modules=modules, root=base_dir)
