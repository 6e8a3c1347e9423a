import json

import pytest

from flint.errors import LogConfigError
from flint.launchd import ServiceDescriptor
from flint.service_log import ServiceLog


def descriptor(**keys) -> ServiceDescriptor:
    return ServiceDescriptor.model_validate({"Program": "/usr/bin/true", **keys})


def test_defaults(paths):
    log = ServiceLog("demo", descriptor(), paths)
    assert log.stdout_path == paths.home / "Library" / "Logs" / "Flint" / "demo.log"
    assert log.stderr_path == paths.home / "Library" / "Logs" / "Flint" / "demo_error.log"


def test_descriptor_paths(paths, tmp_path):
    log = ServiceLog("demo", descriptor(
        StandardOutPath=str(tmp_path / "out.log"),
        StandardErrorPath=str(tmp_path / "err.log"),
    ), paths)
    assert log.stdout_path == tmp_path / "out.log"
    assert log.stderr_path == tmp_path / "err.log"


def test_descriptor_stdout_only(paths, tmp_path):
    log = ServiceLog("demo", descriptor(StandardOutPath=str(tmp_path / "out.log")), paths)
    assert log.stdout_path == tmp_path / "out.log"
    assert log.stderr_path == paths.log_dir / "demo_error.log"


def test_user_config_wins(paths, tmp_path):
    paths.config_dir.mkdir(parents=True)
    (paths.config_dir / "demo.json").write_text(json.dumps({
        "standard_out_path": str(tmp_path / "custom.log"),
        "standard_error_path": str(tmp_path / "custom_error.log"),
    }))
    log = ServiceLog("demo", descriptor(StandardOutPath="/var/log/demo.log"), paths)
    assert log.stdout_path == tmp_path / "custom.log"
    assert log.stderr_path == tmp_path / "custom_error.log"


def test_user_config_partial(paths, tmp_path):
    paths.config_dir.mkdir(parents=True)
    (paths.config_dir / "demo.json").write_text(json.dumps({"standard_error_path": str(tmp_path / "err.log")}))
    log = ServiceLog("demo", descriptor(), paths)
    assert log.stdout_path == paths.log_dir / "demo.log"
    assert log.stderr_path == tmp_path / "err.log"


@pytest.mark.parametrize("content", ["{not: valid", "[1, 2]", '{"standard_out_path": 5}'])
def test_malformed_user_config(paths, content):
    paths.config_dir.mkdir(parents=True)
    (paths.config_dir / "demo.json").write_text(content)
    with pytest.raises(LogConfigError):
        ServiceLog("demo", descriptor(), paths)


def test_create_log_dirs(paths):
    log = ServiceLog("demo", descriptor(), paths)
    log.create_log_dirs()
    log.create_log_dirs()
    assert paths.log_dir.is_dir()
