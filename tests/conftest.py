"""Shared test fixtures for the buildlens test suite."""

from pathlib import Path

import pytest

from buildlens.gradle.fetch import fetch_project_tree
from buildlens.gradle.session import ModelSession
from buildlens.gradle.snapshot import SnapshotModelService

MANIFEST = "src/main/AndroidManifest.xml"


def make_module_dir(root: Path, name: str, android: bool = True) -> Path:
    """Create a module directory, with the Android manifest marker when requested."""
    module_dir = root / name
    module_dir.mkdir(parents=True, exist_ok=True)
    if android:
        manifest = module_dir / MANIFEST
        manifest.parent.mkdir(parents=True, exist_ok=True)
        manifest.write_text("<manifest/>")
    return module_dir


def android_models(project_type: str, variants, variant_dependencies, source_dir: str):
    return {
        "BasicProjectModel": {
            "projectType": project_type,
            "mainSourceSet": {
                "sourceProvider": {
                    "javaDirectories": [f"{source_dir}/src/main/java"],
                    "kotlinDirectories": [f"{source_dir}/src/main/kotlin"],
                },
            },
        },
        "ApplicationOrLibraryProjectModel": {"variants": variants},
        "ProjectDslModel": {"productFlavors": [], "buildTypes": [{"name": "debug"}, {"name": "release"}]},
        "VariantDependencies": variant_dependencies,
    }


@pytest.fixture
def project_root(tmp_path):
    """Project directory with two Android modules (:app, :lib) and one plain module (:shared)."""
    make_module_dir(tmp_path, "app")
    make_module_dir(tmp_path, "lib")
    make_module_dir(tmp_path, "shared", android=False)
    return tmp_path


@pytest.fixture
def app_debug_dependencies():
    """VariantDependencies payload of :app for the debug variant."""
    return {
        "name": "debug",
        "mainArtifact": {
            "compileDependencies": [
                {
                    "key": "com.example|lib|1.0|attr>x",
                    "dependencies": [{"key": "com.example|transitive|2.0|attr>x"}],
                },
                {"key": ":|:lib|debug|attr>y"},
                {"key": "org.unknown|missing|1.0"},
            ],
            "runtimeDependencies": [
                {"key": "com.example|lib|1.0|attr>x"},
                {"key": "com.example|runtime-only|3.0"},
            ],
        },
        "unitTestArtifact": {
            "compileDependencies": [{"key": "junit|junit|4.13.2"}],
        },
        "libraries": {
            "com.example|lib|1.0|attr>x": {"artifact": "/r/lib.jar"},
            "com.example|transitive|2.0|attr>x": {
                "artifact": "/r/transitive.aar",
                "androidLibraryData": {"compileJarFiles": ["/r/t/classes.jar", "/r/t/libs/extra.jar"]},
            },
            "com.example|runtime-only|3.0": {"artifact": "/r/runtime-only.jar"},
            "junit|junit|4.13.2": {"artifact": "/r/junit.jar"},
        },
    }


@pytest.fixture
def snapshot(project_root, app_debug_dependencies):
    """Snapshot document describing the fixture project."""
    app_variants = [
        {
            "name": "debug",
            "displayName": "debug",
            "mainArtifact": {
                "classesFolders": ["/b/app/classes", "/b/app/R.jar"],
                "generatedSourceFolders": ["/b/app/generated/source/buildConfig/debug"],
            },
        },
        {"name": "release", "displayName": "release"},
    ]
    lib_variants = [{"name": "debug"}, {"name": "release"}]
    lib_dependencies = {
        "mainArtifact": {
            "compileDependencies": [{"key": "com.example|lib|1.0|attr>x"}],
        },
        "libraries": {"com.example|lib|1.0|attr>x": {"artifact": "/r/lib.jar"}},
    }

    return {
        "tree": {
            "name": "fixture",
            "path": ":",
            "projectDirectory": ".",
            "children": [
                {"name": "app", "path": ":app", "projectDirectory": "app"},
                {"name": "lib", "path": ":lib", "projectDirectory": "lib"},
                {"name": "shared", "path": ":shared", "projectDirectory": "shared"},
            ],
        },
        "models": {
            ":app": android_models(
                "APPLICATION",
                app_variants,
                {"debug": app_debug_dependencies, "release": {"name": "release"}},
                str(project_root / "app"),
            ),
            ":lib": android_models(
                "LIBRARY",
                lib_variants,
                {"debug": lib_dependencies, "release": lib_dependencies},
                str(project_root / "lib"),
            ),
            ":shared": {
                "GenericModuleModel": {
                    "name": "shared",
                    "sourceDirectories": [str(project_root / "shared/src/main/java")],
                    "testDirectories": [str(project_root / "shared/src/test/java")],
                    "dependencies": [
                        {
                            "file": "/r/guava.jar",
                            "gradleModuleVersion": {"group": "com.google.guava", "name": "guava", "version": "33.0"},
                            "scope": "compile",
                        },
                        {"file": "/r/no-coordinates.jar"},
                    ],
                },
            },
        },
    }


@pytest.fixture
def service(snapshot):
    """In-memory model service serving the fixture snapshot."""
    return SnapshotModelService.from_dict(snapshot)


@pytest.fixture
def session(service, project_root):
    """Model session for the fixture project."""
    with ModelSession(service, project_root) as model_session:
        yield model_session


@pytest.fixture
def tree(session):
    """Project tree with absolute module directories."""
    return fetch_project_tree(session).value
