import base64
import xml.etree.ElementTree as ET

import pytest

import panosc.errors as err
from panosc.bootstrap import BootstrapBuilder
from panosc.elements import BootstrapInfo


PATHS = [
    "/config/init-cfg.txt",
    "/config/bootstrap.xml",
    "/license/authcodes",
    "/content",
    "/software",
]


def _builder(**kwargs):
    return BootstrapBuilder("10.0.0.5", "vss-A", "755036225328715", **kwargs)


def test_build_has_five_fixed_entries():
    package = _builder().build(BootstrapInfo("fw1"))

    assert len(package) == 5
    assert list(package) == PATHS


def test_init_cfg_contents():
    package = _builder().build(BootstrapInfo("fw1"))

    init_cfg = package["/config/init-cfg.txt"].decode("utf-8")
    assert init_cfg
    for value in ("fw1", "10.0.0.5", "vss-A"):
        assert value in init_cfg
    assert "hostname=fw1\n" in init_cfg
    assert "panorama-server=10.0.0.5\n" in init_cfg
    assert "dgname=vss-A\n" in init_cfg
    assert "vm-auth-key=755036225328715\n" in init_cfg


def test_bootstrap_xml_contents():
    package = _builder().build(BootstrapInfo("fw1"))

    root = ET.fromstring(package["/config/bootstrap.xml"])
    assert root.findtext("deviceconfig/system/hostname") == "fw1"
    assert root.findtext("deviceconfig/system/panorama-server") == "10.0.0.5"


def test_bootstrap_xml_escapes_name():
    package = _builder().build(BootstrapInfo("fw<1>&"))

    root = ET.fromstring(package["/config/bootstrap.xml"])
    assert root.findtext("deviceconfig/system/hostname") == "fw<1>&"


def test_license_and_placeholders():
    package = _builder().build(BootstrapInfo("fw1"))

    assert package["/license/authcodes"] == b"I7517916"
    assert package["/content"] == b""
    assert package["/software"] == b""


def test_license_auth_code_is_configurable():
    package = _builder(license_auth_code="I0000001").build(BootstrapInfo("fw1"))

    assert package["/license/authcodes"] == b"I0000001"


def test_payloads_are_bytes():
    package = _builder().build(BootstrapInfo("fw1"))

    for path in package:
        assert isinstance(package[path], bytes)


def test_encoded():
    package = _builder().build(BootstrapInfo("fw1"))

    encoded = package.encoded()

    assert list(encoded) == PATHS
    assert base64.b64decode(encoded["/license/authcodes"]) == b"I7517916"
    assert encoded["/content"] == b""


def test_custom_init_cfg_template():
    package = _builder(init_cfg_template="{name}|{panorama}|{devicegroup}|{authkey}").build(
        BootstrapInfo("fw1"))

    assert package["/config/init-cfg.txt"] == b"fw1|10.0.0.5|vss-A|755036225328715"


def test_failed_entry_fails_whole_build():
    builder = _builder(init_cfg_template="hostname={name}\nserial={serial}\n")

    with pytest.raises(err.BootstrapError) as excinfo:
        builder.build(BootstrapInfo("fw1"))

    assert list(excinfo.value.failures) == ["/config/init-cfg.txt"]
    assert isinstance(excinfo.value.failures["/config/init-cfg.txt"], KeyError)
    assert excinfo.value.device_group == "vss-A"
    assert "/config/init-cfg.txt" in str(excinfo.value)


def test_failures_are_aggregated():
    builder = _builder(init_cfg_template="{serial}", bootstrap_xml_template="{model}")

    with pytest.raises(err.BootstrapError) as excinfo:
        builder.build(BootstrapInfo("fw1"))

    assert sorted(excinfo.value.failures) == ["/config/bootstrap.xml", "/config/init-cfg.txt"]
