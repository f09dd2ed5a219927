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


"""Read-only view of the device-groups on Panorama"""

import pan.xapi

import panosc
import panosc.errors as err
from panosc.elements import DeviceElement

logger = panosc.getlogger(__name__)


SHOW_DEVICEGROUPS_CMD = "<show><devicegroups></devicegroups></show>"


class DeviceGroupLister(object):
    """Lists device-groups using the ``show devicegroups`` op command

    Nothing is cached, every call goes to Panorama.

    Args:
        client (PanoramaClient): Connection to Panorama

    """
    def __init__(self, client):
        self.client = client

    def list_device_groups(self):
        """Get all device-groups on Panorama

        Raises:
            RemoteQueryError

        Returns:
            list: :class:`panosc.elements.DeviceElement` instances

        """
        try:
            response = self.client.op(SHOW_DEVICEGROUPS_CMD)
        except pan.xapi.PanXapiError as e:
            raise err.RemoteQueryError("Failed to list device groups: %s" % (e,))

        if response is None or response.find("result") is None:
            raise err.RemoteQueryError("Failed to list device groups: no result in returned XML")

        devicegroups = response.find("result/devicegroups")
        if devicegroups is None:
            return []

        ans = []
        for entry in devicegroups.findall("entry"):
            name = entry.get("name")
            if not name:
                continue
            ans.append(DeviceElement(name, name))

        logger.debug1("Found %d device groups" % len(ans))
        return ans

    def get(self, name):
        """Get the device-group with the given name, or None"""
        if name is None:
            raise ValueError("Null device id is not allowed!")
        return next((dg for dg in self.list_device_groups() if dg.name == name), None)

    def exists(self, name):
        return self.get(name) is not None
