"""
Upstream model payloads returned by the model service.

These mirror the Gradle tooling / Android builder models closely enough to
resolve a project, and are validated with pydantic. Field names accept both
camelCase (as produced by the model server) and snake_case.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class UpstreamModel(BaseModel):
    """Base for all upstream payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ProjectTreeNode(UpstreamModel):
    """One node of the Gradle project hierarchy. The root has path ":"."""

    name: str
    path: str
    project_directory: Optional[str] = None
    children: List["ProjectTreeNode"] = Field(default_factory=list)


class ProjectType(str, Enum):
    APPLICATION = "APPLICATION"
    LIBRARY = "LIBRARY"
    DYNAMIC_FEATURE = "DYNAMIC_FEATURE"
    TEST = "TEST"
    FUSED_LIBRARY = "FUSED_LIBRARY"


class SourceProviderModel(UpstreamModel):
    name: str = "main"
    java_directories: List[str] = Field(default_factory=list)
    kotlin_directories: List[str] = Field(default_factory=list)


class SourceSetContainerModel(UpstreamModel):
    source_provider: SourceProviderModel = Field(default_factory=SourceProviderModel)


class BasicProjectModel(UpstreamModel):
    """Cheap model: project type and declared source sets."""

    path: str = ""
    project_type: ProjectType = ProjectType.LIBRARY
    main_source_set: Optional[SourceSetContainerModel] = None


class ArtifactModel(UpstreamModel):
    name: str = "main"
    classes_folders: List[str] = Field(default_factory=list)
    generated_source_folders: List[str] = Field(default_factory=list)


class VariantModel(UpstreamModel):
    name: str
    display_name: Optional[str] = None
    main_artifact: ArtifactModel = Field(default_factory=ArtifactModel)


class ApplicationOrLibraryProjectModel(UpstreamModel):
    """Full Android project model with every variant."""

    path: str = ""
    namespace: str = ""
    variants: List[VariantModel] = Field(default_factory=list)

    def variant(self, name: str) -> Optional[VariantModel]:
        return next((v for v in self.variants if v.name == name), None)


class ProductFlavorModel(UpstreamModel):
    name: str
    dimension: Optional[str] = None
    is_default: Optional[bool] = None


class BuildTypeModel(UpstreamModel):
    name: str
    is_default: Optional[bool] = None


class ProjectDslModel(UpstreamModel):
    """Build script DSL values (flavors and build types with their default flags)."""

    product_flavors: List[ProductFlavorModel] = Field(default_factory=list)
    build_types: List[BuildTypeModel] = Field(default_factory=list)


class GraphItemModel(UpstreamModel):
    """
    One edge of the resolved dependency graph.

    Only the textual `record` is authoritative; it has the shape
    ``GraphItemImpl(key=<key>, requestedCoordinates=<coords>, dependencies=[...])``.
    When a payload carries `key` instead, the record is rendered from it.
    """

    record: str = ""
    key: Optional[str] = None
    requested_coordinates: Optional[str] = None
    dependencies: List["GraphItemModel"] = Field(default_factory=list)

    @model_validator(mode="after")
    def _render_record(self) -> "GraphItemModel":
        if not self.record and self.key is not None:
            self.record = render_graph_item(self.key, self.requested_coordinates)
        return self

    def __str__(self) -> str:
        return self.record


def render_graph_item(key: str, requested_coordinates: Optional[str] = None) -> str:
    """Textual rendering of a graph item, as printed by the upstream model."""
    return f"GraphItemImpl(key={key}, requestedCoordinates={requested_coordinates}, dependencies=[])"


class ArtifactDependenciesModel(UpstreamModel):
    compile_dependencies: List[GraphItemModel] = Field(default_factory=list)
    runtime_dependencies: Optional[List[GraphItemModel]] = None


class AndroidLibraryDataModel(UpstreamModel):
    compile_jar_files: List[str] = Field(default_factory=list)


class ProjectInfoModel(UpstreamModel):
    project_path: str
    build_type: Optional[str] = None
    capabilities: List[str] = Field(default_factory=list)


class LibraryModel(UpstreamModel):
    """Enriched library record, looked up by the exact graph-item key."""

    key: str = ""
    type: str = "JAVA_LIBRARY"
    artifact: Optional[str] = None
    android_library_data: Optional[AndroidLibraryDataModel] = None
    project_info: Optional[ProjectInfoModel] = None


class VariantDependenciesModel(UpstreamModel):
    """Dependency graphs of one variant plus the shared library lookup table."""

    name: str = ""
    main_artifact: ArtifactDependenciesModel = Field(default_factory=ArtifactDependenciesModel)
    unit_test_artifact: Optional[ArtifactDependenciesModel] = None
    libraries: Dict[str, LibraryModel] = Field(default_factory=dict)


class ModuleVersionModel(UpstreamModel):
    group: str
    name: str
    version: str


class SingleEntryLibraryModel(UpstreamModel):
    file: Optional[str] = None
    gradle_module_version: Optional[ModuleVersionModel] = None
    scope: Optional[str] = None


class GenericModuleModel(UpstreamModel):
    """Source roots and plain library entries of a non-Android module."""

    name: str = ""
    source_directories: List[str] = Field(default_factory=list)
    test_directories: List[str] = Field(default_factory=list)
    dependencies: List[SingleEntryLibraryModel] = Field(default_factory=list)


ProjectTreeNode.model_rebuild()
GraphItemModel.model_rebuild()
