"""
Tests for the raw (nested) model export
"""

from buildlens import RawProjectResolver
from buildlens.gradle.snapshot import SnapshotModelService
from buildlens.models.project import RawAndroidModule, RawGenericModule
from buildlens.models.variant import BuildVariant
from buildlens.shared.domain.outcome import Err, Ok


class TestRawProjectResolver:
    """Test nested export of every model"""

    def test_nesting_starts_at_the_root(self, service, project_root):
        outcome = RawProjectResolver(project_root, service).resolve()

        assert isinstance(outcome, Ok)
        root = outcome.value.module
        assert isinstance(root, RawGenericModule)
        assert root.path == ":"
        assert [child.path for child in root.children] == [":app", ":lib", ":shared"]

    def test_android_module_keeps_every_model(self, service, project_root):
        root = RawProjectResolver(project_root, service).resolve().value.module
        app = root.children[0]

        assert isinstance(app, RawAndroidModule)
        assert isinstance(app.basic_project, Ok)
        assert isinstance(app.project, Ok)
        assert isinstance(app.dsl, Ok)
        assert app.variant_dependencies.value.name == "debug"

    def test_reference_variant_drives_dependencies(self, service, project_root):
        resolver = RawProjectResolver(project_root, service, BuildVariant("paidRelease"))

        app = resolver.resolve().value.module.children[0]

        assert app.variant_dependencies.value.name == "release"

    def test_missing_models_are_kept_as_errors(self, snapshot, project_root):
        del snapshot["models"][":lib"]["ApplicationOrLibraryProjectModel"]

        root = RawProjectResolver(project_root, SnapshotModelService.from_dict(snapshot)).resolve().value.module
        lib = root.children[1]

        assert isinstance(lib.project, Err)
        assert lib.project.is_not_found
        assert isinstance(lib.variant_dependencies, Err)
        assert lib.variant_dependencies.note == lib.project.note

    def test_generic_module_model(self, service, project_root):
        shared = RawProjectResolver(project_root, service).resolve().value.module.children[2]

        assert isinstance(shared, RawGenericModule)
        assert shared.generic_model.value.name == "shared"

    def test_json_export(self, service, project_root):
        data = RawProjectResolver(project_root, service).resolve().value.module.to_json()

        app = data["children"][0]
        assert app["type"] == "android"
        assert app["basicProject"]["status"] == "ok"
        assert app["basicProject"]["value"]["projectType"] == "APPLICATION"
        assert data["genericModel"]["status"] == "error"

    def test_connection_failure(self, project_root):
        outcome = RawProjectResolver(project_root, SnapshotModelService(project_root / "missing.yaml")).resolve()

        assert isinstance(outcome, Err)
