"""
Tests for the module resolution orchestrator
"""

import pytest

from buildlens.gradle.fetch import fetch_project_tree
from buildlens.gradle.models import ProjectTreeNode
from buildlens.gradle.session import ModelSession
from buildlens.gradle.service import ModelKind
from buildlens.gradle.snapshot import SnapshotConnection, SnapshotModelService
from buildlens.models.dependency import JarDependency, Scope
from buildlens.models.module import (
    FailedModule,
    ModuleType,
    ResolvedApplicationOrLibraryModule,
    ResolvedGenericModule,
    UnknownModule,
)
from buildlens.models.source_root import Language, SourceRoot
from buildlens.models.variant import BuildVariant
from buildlens.resolution.orchestrator import ModuleResolver, flatten_module_tree, is_android_module, module_concurrency
from buildlens.shared.domain.exceptions import ConfigurationError

DEBUG = BuildVariant(name="debug", display_name="debug")


def node(name, *children):
    return ProjectTreeNode(name=name, path=f":{name}", project_directory=f"/p/{name}", children=list(children))


async def resolve_snapshot(snapshot, project_root, reference=DEBUG, **options):
    with ModelSession(SnapshotModelService.from_dict(snapshot), project_root) as session:
        root = fetch_project_tree(session).value
        return await ModuleResolver(session, **options).resolve_modules(root, reference)


class TestFlattenModuleTree:
    """Test pre-order flattening"""

    def test_pre_order_excluding_root(self):
        root = node("root", node("A", node("A1"), node("A2")), node("B"))

        assert [n.name for n in flatten_module_tree(root)] == ["A", "A1", "A2", "B"]

    def test_deep_nesting(self):
        root = node("root", node("a", node("b", node("c", node("d")))))

        assert [n.name for n in flatten_module_tree(root)] == ["a", "b", "c", "d"]

    def test_root_without_children(self):
        assert flatten_module_tree(node("root")) == []


class TestClassification:
    """Test manifest-based module classification"""

    def test_manifest_marks_android_module(self, tree):
        assert [is_android_module(child) for child in tree.children] == [True, True, False]

    def test_node_without_directory_is_not_android(self):
        assert is_android_module(ProjectTreeNode(name="x", path=":x")) is False

    def test_custom_marker(self, tree, project_root):
        (project_root / "shared" / "build.gradle.kts").write_text("plugins { }")

        assert is_android_module(tree.children[2], marker="build.gradle.kts") is True


class TestModuleResolver:
    """Test resolving every module of the fixture project"""

    @pytest.mark.asyncio
    async def test_every_module_resolved_in_flatten_order(self, snapshot, project_root):
        modules = await resolve_snapshot(snapshot, project_root)

        assert [(m.name, m.path) for m in modules] == [("app", ":app"), ("lib", ":lib"), ("shared", ":shared")]
        assert isinstance(modules[0], ResolvedApplicationOrLibraryModule)
        assert isinstance(modules[1], ResolvedApplicationOrLibraryModule)
        assert modules[2] == ResolvedGenericModule(name="shared", path=":shared")

    @pytest.mark.asyncio
    async def test_android_module_assembly(self, snapshot, project_root):
        app = (await resolve_snapshot(snapshot, project_root))[0]

        assert app.module_type == ModuleType.APPLICATION
        assert app.selected_variant.name == "debug"
        assert [v.name for v in app.build_variants] == ["debug", "release"]
        assert app.roots == (
            SourceRoot(f"{project_root / 'app'}/src/main/java", Language.JAVA),
            SourceRoot(f"{project_root / 'app'}/src/main/kotlin", Language.KOTLIN),
            SourceRoot("/b/app/generated/source/buildConfig/debug", Language.JAVA),
        )
        assert len(app.dependencies) == 7

    @pytest.mark.asyncio
    async def test_library_module_type(self, snapshot, project_root):
        lib = (await resolve_snapshot(snapshot, project_root))[1]

        assert lib.module_type == ModuleType.LIBRARY
        assert lib.dependencies == (JarDependency("/r/lib.jar", "com.example", "lib", "1.0", Scope.COMPILE),)

    @pytest.mark.asyncio
    async def test_module_variant_follows_reference(self, snapshot, project_root):
        modules = await resolve_snapshot(snapshot, project_root, reference=BuildVariant("proRelease"))

        assert [m.selected_variant.name for m in modules[:2]] == ["release", "release"]

    @pytest.mark.asyncio
    async def test_failing_module_is_isolated(self, snapshot, project_root):
        snapshot["models"][":lib"]["ApplicationOrLibraryProjectModel"] = {"$error": "sync failed"}

        modules = await resolve_snapshot(snapshot, project_root)

        assert len(modules) == 3
        assert isinstance(modules[0], ResolvedApplicationOrLibraryModule)
        assert isinstance(modules[1], FailedModule)
        assert isinstance(modules[2], ResolvedGenericModule)
        assert modules[1].name == "lib"
        assert modules[1].details == "There was an error while fetching ApplicationOrLibraryProjectModel model from: :lib"

    @pytest.mark.asyncio
    async def test_missing_dependencies_model_fails_module(self, snapshot, project_root):
        del snapshot["models"][":lib"]["VariantDependencies"]

        lib = (await resolve_snapshot(snapshot, project_root))[1]

        assert isinstance(lib, FailedModule)
        assert lib.details == "There is no VariantDependencies model in: :lib"

    @pytest.mark.asyncio
    async def test_missing_basic_model_fails_module(self, snapshot, project_root):
        del snapshot["models"][":lib"]["BasicProjectModel"]

        lib = (await resolve_snapshot(snapshot, project_root))[1]

        assert isinstance(lib, FailedModule)
        assert lib.details == "There is no BasicProjectModel model in: :lib"

    @pytest.mark.asyncio
    async def test_module_without_variants_fails(self, snapshot, project_root):
        snapshot["models"][":lib"]["ApplicationOrLibraryProjectModel"] = {"variants": []}

        lib = (await resolve_snapshot(snapshot, project_root))[1]

        assert isinstance(lib, FailedModule)
        assert lib.details == "No build variants found for: :lib"

    @pytest.mark.asyncio
    async def test_node_without_directory_is_unknown(self, snapshot, project_root):
        snapshot["tree"]["children"].append({"name": "ghost", "path": ":ghost"})

        modules = await resolve_snapshot(snapshot, project_root)

        assert modules[-1] == UnknownModule(name="ghost", path=":ghost")

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_failed_module(self, snapshot, project_root, monkeypatch):
        async def explode(self, handle, reference):
            raise RuntimeError("unexpected payload")

        monkeypatch.setattr(ModuleResolver, "resolve_android_module", explode)

        modules = await resolve_snapshot(snapshot, project_root)

        assert [type(m) for m in modules] == [FailedModule, FailedModule, ResolvedGenericModule]
        assert modules[0].details == "Unexpected error: unexpected payload"

    @pytest.mark.asyncio
    async def test_sequential_and_concurrent_results_match(self, snapshot, project_root):
        sequential = await resolve_snapshot(snapshot, project_root, concurrency=1)
        concurrent = await resolve_snapshot(snapshot, project_root, concurrency=8)

        assert sequential == concurrent

    @pytest.mark.asyncio
    async def test_basic_model_fetched_once_per_android_module(self, snapshot, project_root, monkeypatch):
        queried = []
        original_query = SnapshotConnection.query

        def recording_query(self, handle, kind, params=None):
            queried.append((handle, kind))
            return original_query(self, handle, kind, params)

        monkeypatch.setattr(SnapshotConnection, "query", recording_query)

        await resolve_snapshot(snapshot, project_root)

        basic = [handle for handle, kind in queried if kind == ModelKind.BASIC_PROJECT]
        assert sorted(basic) == [":app", ":lib"]

    @pytest.mark.asyncio
    async def test_resolution_is_idempotent(self, snapshot, project_root):
        first = await resolve_snapshot(snapshot, project_root)
        second = await resolve_snapshot(snapshot, project_root)

        assert [m.to_json() for m in first] == [m.to_json() for m in second]


class TestGenericModules:
    """Test the optional generic module resolution"""

    @pytest.mark.asyncio
    async def test_generic_module_roots_and_dependencies(self, snapshot, project_root):
        shared = (await resolve_snapshot(snapshot, project_root, resolve_generic_modules=True))[2]

        assert isinstance(shared, ResolvedGenericModule)
        assert shared.roots == (
            SourceRoot(str(project_root / "shared/src/main/java"), Language.JAVA),
            SourceRoot(str(project_root / "shared/src/test/java"), Language.JAVA),
        )
        assert shared.dependencies == (
            JarDependency("/r/guava.jar", "com.google.guava", "guava", "33.0", Scope.COMPILE),
        )

    @pytest.mark.asyncio
    async def test_missing_generic_model_fails_module(self, snapshot, project_root):
        del snapshot["models"][":shared"]

        shared = (await resolve_snapshot(snapshot, project_root, resolve_generic_modules=True))[2]

        assert isinstance(shared, FailedModule)
        assert shared.details == "There is no GenericModuleModel model in: :shared"


class TestModuleConcurrency:
    """Test concurrency validation"""

    def test_explicit_value_wins(self):
        assert module_concurrency(2) == 2

    def test_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr("buildlens.resolution.orchestrator.settings.module_concurrency", 3)

        assert module_concurrency() == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_values_below_one(self, value):
        with pytest.raises(ConfigurationError, match="at least 1"):
            module_concurrency(value)

    def test_resolver_rejects_zero(self, session):
        with pytest.raises(ConfigurationError):
            ModuleResolver(session, concurrency=0)
