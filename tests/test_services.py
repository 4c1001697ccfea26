"""Unit tests for the service catalog."""

from hostbridge.services import SERVICES, find_service, is_streaming


def test_find_service_short_and_full_name():
    assert find_service("DiffService") is find_service("host.DiffService")
    assert find_service("DiffService").full_name == "host.DiffService"
    assert find_service("NoSuchService") is None


def test_diff_lifecycle_methods_listed():
    methods = find_service("DiffService").methods
    for name in ("openDiff", "applyEdits", "saveDocument", "closeDiff"):
        assert name in methods


def test_streaming_methods():
    assert is_streaming("subscribeToTelemetrySettings")
    assert not is_streaming("getTelemetrySettings")
    assert not is_streaming("madeUpMethod")


def test_to_dict():
    env = find_service("EnvService").to_dict()
    assert env["name"] == "host.EnvService"
    flags = {m["name"]: m["server_streaming"] for m in env["methods"]}
    assert flags["subscribeToTelemetrySettings"] is True
    assert flags["getMachineId"] is False


def test_service_names_unique():
    names = [s.name for s in SERVICES]
    assert len(names) == len(set(names))
