#!/usr/bin/env python

# Copyright (c) 2016, Palo Alto Networks
#
# Permission to use, copy, modify, and/or distribute this software for any
# purpose with or without fee is hereby granted, provided that the above
# copyright notice and this permission notice appear in all copies.
#
# THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
# WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
# ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
# WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
# ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
# OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.


"""VM-Series bootstrap package

A bootstrapped firewall reads ``/config/init-cfg.txt`` and
``/config/bootstrap.xml`` to find its Panorama and device-group, and
``/license/authcodes`` to license itself.  Empty ``/content`` and
``/software`` entries mean no content or software bundle is included.

"""

from xml.sax.saxutils import escape

import panosc
import panosc.errors as err
from panosc.elements import BootstrapPackage

logger = panosc.getlogger(__name__)


LICENSE_AUTH_CODE = "I7517916"

INIT_CFG = "/config/init-cfg.txt"
BOOTSTRAP_XML = "/config/bootstrap.xml"
AUTHCODES = "/license/authcodes"
CONTENT = "/content"
SOFTWARE = "/software"

INIT_CFG_TEMPLATE = """\
type=dhcp-client
ip-address=
default-gateway=
netmask=
ipv6-address=
ipv6-default-gateway=
hostname={name}
vm-auth-key={authkey}
panorama-server={panorama}
panorama-server-2=
tplname=
dgname={devicegroup}
dns-primary=
dns-secondary=
op-command-modes=
dhcp-send-hostname=yes
dhcp-send-client-id=yes
dhcp-accept-server-hostname=yes
dhcp-accept-server-domain=yes
"""

BOOTSTRAP_XML_TEMPLATE = """\
<?xml version="1.0"?>
<config version="7.1.0" urldb="paloaltonetworks">
  <deviceconfig>
    <system>
      <hostname>{name}</hostname>
      <panorama-server>{panorama}</panorama-server>
      <type>
        <dhcp-client>
          <send-hostname>yes</send-hostname>
          <send-client-id>yes</send-client-id>
          <accept-dhcp-hostname>yes</accept-dhcp-hostname>
          <accept-dhcp-domain>yes</accept-dhcp-domain>
        </dhcp-client>
      </type>
    </system>
  </deviceconfig>
</config>
"""


class BootstrapBuilder(object):
    """Builds the bootstrap package for firewalls in one device-group

    Args:
        panorama (str): Address of Panorama the firewall registers with
        devicegroup (str): Device-group the firewall joins
        authkey (str): vm-auth-key generated on Panorama
        license_auth_code (str): License auth code
        init_cfg_template (str): Template for ``/config/init-cfg.txt``
        bootstrap_xml_template (str): Template for ``/config/bootstrap.xml``

    """
    def __init__(self, panorama, devicegroup, authkey,
                 license_auth_code=LICENSE_AUTH_CODE,
                 init_cfg_template=INIT_CFG_TEMPLATE,
                 bootstrap_xml_template=BOOTSTRAP_XML_TEMPLATE):
        self.panorama = panorama
        self.devicegroup = devicegroup
        self.authkey = authkey
        self.license_auth_code = license_auth_code
        self.init_cfg_template = init_cfg_template
        self.bootstrap_xml_template = bootstrap_xml_template

    def init_cfg(self, info):
        return self.init_cfg_template.format(
            name=info.name,
            panorama=self.panorama,
            devicegroup=self.devicegroup,
            authkey=self.authkey,
        ).encode("utf-8")

    def bootstrap_xml(self, info):
        return self.bootstrap_xml_template.format(
            name=escape(info.name),
            panorama=escape(self.panorama),
        ).encode("utf-8")

    def license(self):
        return self.license_auth_code.encode("utf-8")

    def build(self, info):
        """Build the bootstrap package for one firewall

        Every file is attempted.  If any of them fails, a BootstrapError
        listing each failed path is raised instead of returning a
        partial package.

        Args:
            info (BootstrapInfo): The firewall being bootstrapped

        Raises:
            BootstrapError

        Returns:
            BootstrapPackage

        """
        files = (
            (INIT_CFG, lambda: self.init_cfg(info)),
            (BOOTSTRAP_XML, lambda: self.bootstrap_xml(info)),
            (AUTHCODES, self.license),
            (CONTENT, lambda: b""),
            (SOFTWARE, lambda: b""),
        )

        package = BootstrapPackage()
        failures = {}
        for path, make in files:
            try:
                package.add_bootstrap_file(path, make())
            except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
                logger.error("Failed to build bootstrap file %s: %s" % (path, e))
                failures[path] = e

        if failures:
            raise err.BootstrapError(
                "Failed to build bootstrap files for %s in device group %s: %s" % (
                    getattr(info, "name", None), self.devicegroup,
                    ", ".join(sorted(failures))),
                device_group=self.devicegroup,
                failures=failures)

        logger.debug("Built bootstrap package for %s" % info.name)
        return package
