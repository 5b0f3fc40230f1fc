import pytest

from imagescan.client import conf
from imagescan.client.exceptions import InvalidSettings, ImageScanError


def fake_include(values):
    """
    Returns a replacement for flexi_settings.include that loads the given values.
    """
    def include(path, settings):
        settings.update(values[path])
    return include


def test_defaults():
    settings = conf.from_dict({ "url": "http://scanner.test" })
    assert settings.url == "http://scanner.test"
    assert settings.timeout == 30.0


def test_no_timeout():
    settings = conf.from_dict({ "url": "http://scanner.test", "timeout": None })
    assert settings.timeout is None


@pytest.mark.parametrize("config", [
    {},
    { "url": "" },
    { "url": "http://scanner.test", "timeout": 0 },
    { "url": "http://scanner.test", "timeout": -1 },
])
def test_invalid(config):
    with pytest.raises(InvalidSettings) as excinfo:
        conf.from_dict(config)
    assert excinfo.value.code == 300
    assert isinstance(excinfo.value, ImageScanError)


def test_from_file(monkeypatch):
    monkeypatch.setattr(conf, "include", fake_include({
        "/etc/imagescan/client.conf": { "url": "http://scanner.test", "timeout": 5 },
    }))
    settings = conf.from_file("/etc/imagescan/client.conf")
    assert settings.url == "http://scanner.test"
    assert settings.timeout == 5.0


def test_from_env_file(monkeypatch):
    monkeypatch.setattr(conf, "include", fake_include({
        "/etc/imagescan/client.conf": { "url": "http://default.test" },
        "/tmp/client.conf": { "url": "http://override.test" },
    }))
    monkeypatch.delenv("IMAGESCAN_CLIENT_CONFIG", raising = False)
    assert conf.from_env_file().url == "http://default.test"
    monkeypatch.setenv("IMAGESCAN_CLIENT_CONFIG", "/tmp/client.conf")
    assert conf.from_env_file().url == "http://override.test"
