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


"""Objects exchanged with the security orchestration controller"""

import base64
import collections


ManagerConnector = collections.namedtuple(
    "ManagerConnector", ["name", "ip_address"])
ManagerConnector.__doc__ = """The Panorama appliance as registered with the controller

Args:
    name (str): Connector name on the controller
    ip_address (str): Management address of Panorama

"""

VirtualSystem = collections.namedtuple("VirtualSystem", ["name"])
VirtualSystem.__doc__ = """A controller virtual system, one per Panorama device-group"""

BootstrapInfo = collections.namedtuple("BootstrapInfo", ["name"])
BootstrapInfo.__doc__ = """Per-firewall information used to build a bootstrap package"""


class DeviceElement(object):
    """A device-group as seen by the controller

    Args:
        id (str): Device id, the device-group name
        name (str): Device-group name

    """
    def __init__(self, id, name):
        self.id = id
        self.name = name

    def __str__(self):
        return str(self.name)

    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self.name)

    def __eq__(self, other):
        if not isinstance(other, DeviceElement):
            return NotImplemented
        return self.id == other.id and self.name == other.name

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.id, self.name))


class BootstrapPackage(object):
    """Files a firewall reads on first boot, keyed by path"""
    def __init__(self):
        self.files = collections.OrderedDict()

    def add_bootstrap_file(self, path, content):
        self.files[path] = content

    def encoded(self):
        """Return a copy of the files with base64 encoded content"""
        return collections.OrderedDict(
            (path, base64.b64encode(content)) for path, content in self.files.items())

    def __getitem__(self, path):
        return self.files[path]

    def __contains__(self, path):
        return path in self.files

    def __iter__(self):
        return iter(self.files)

    def __len__(self):
        return len(self.files)
