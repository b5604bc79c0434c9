"""
Tests for the service entry point and package layout.

cmd/ is a plain directory, so the entry point is loaded by file path.
"""

import importlib.util
import types

from conftest import PROJECT_ROOT


MAIN_PATH = PROJECT_ROOT / "cmd" / "api" / "main.py"


def test_stdlib_cmd_is_importable():
    # pdb (used by pytest --pdb) needs cmd.Cmd from the standard library
    import cmd

    assert hasattr(cmd, "Cmd")


def test_cmd_directory_is_not_a_package():
    assert not (PROJECT_ROOT / "cmd" / "__init__.py").exists()
    assert not (PROJECT_ROOT / "cmd" / "api" / "__init__.py").exists()


def test_main_module_builds_app():
    spec = importlib.util.spec_from_file_location("relay_main", MAIN_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    paths = {route.path for route in module.app.routes}
    assert {"/api/analyze", "/api/transcribe", "/api/health", "/api/test"} <= paths


def test_core_logger_attribute_is_module():
    import core
    import core.logger

    assert isinstance(core.logger, types.ModuleType)
    assert hasattr(core.logger, "setup_logger")
