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


"""Device management API for the security orchestration controller

The controller treats each of its virtual systems as one managed device.
On Panorama that device is a device-group named after the virtual system.

"""

import pan.xapi

import panosc
import panosc.errors as err
from panosc.bootstrap import BootstrapBuilder, LICENSE_AUTH_CODE
from panosc.devicegroup import DeviceGroupLister
from panosc.reconcile import DeviceGroupReconciler

logger = panosc.getlogger(__name__)


VM_AUTH_KEY_LIFETIME = 8760


class ManagerDeviceApi(object):
    """Device management capabilities a device manager offers the controller

    Subclasses implement the device-group methods.  Member operations
    raise :class:`panosc.errors.Unsupported` unless overridden.

    """

    def is_device_group_supported(self):
        raise NotImplementedError

    def list_devices(self):
        raise NotImplementedError

    def get_device_by_id(self, id):
        raise NotImplementedError

    def find_device_by_name(self, name):
        raise NotImplementedError

    def create_vss_device(self):
        raise NotImplementedError

    def update_vss_device(self, device):
        raise NotImplementedError

    def delete_vss_device(self):
        raise NotImplementedError

    def get_bootstrap_info(self, info):
        raise NotImplementedError

    def is_upgrade_supported(self, model_type, prev_sw_version, new_sw_version):
        return False

    # Member (individual firewall) operations

    def create_device_member(self, name, vserver_ip_address, contact_ip_address,
                             ip_address, gateway, prefix_length):
        raise err.Unsupported("create_device_member is not supported")

    def update_device_member(self, device_element, name, device_host_name,
                             ip_address, mgmt_ip_address, gateway, prefix_length):
        raise err.Unsupported("update_device_member is not supported")

    def delete_device_member(self, id):
        raise err.Unsupported("delete_device_member is not supported")

    def get_device_member_by_id(self, id):
        raise err.Unsupported("get_device_member_by_id is not supported")

    def find_device_member_by_name(self, name):
        raise err.Unsupported("find_device_member_by_name is not supported")

    def list_device_members(self):
        raise err.Unsupported("list_device_members is not supported")

    def get_device_member_config_by_id(self, mgr_device_id):
        raise err.Unsupported("get_device_member_config_by_id is not supported")

    def get_device_member_configuration(self, dai):
        raise err.Unsupported("get_device_member_configuration is not supported")

    def get_device_member_additional_configuration(self, dai):
        raise err.Unsupported("get_device_member_additional_configuration is not supported")

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class PanoramaDeviceApi(ManagerDeviceApi):
    """Manages the device-group of one virtual system on Panorama

    A vm-auth-key is generated on Panorama when the session is created
    and used in every bootstrap package built by this session.

    Args:
        mc (ManagerConnector): The Panorama appliance
        vs (VirtualSystem): The virtual system, named like its device-group
        client (PanoramaClient): Connection to Panorama
        create_policy (PollPolicy): Polling for device-group creation
        delete_policy (PollPolicy): Polling for device-group deletion
        license_auth_code (str): Auth code placed in ``/license/authcodes``
        vm_auth_key_lifetime (int): Lifetime of the generated vm-auth-key, in hours

    Raises:
        SessionInitError: The vm-auth-key could not be generated

    """
    def __init__(self, mc, vs, client, create_policy=None, delete_policy=None,
                 license_auth_code=LICENSE_AUTH_CODE,
                 vm_auth_key_lifetime=VM_AUTH_KEY_LIFETIME):
        self._logger = panosc.getlogger(__name__ + "." + self.__class__.__name__)
        self.mc = mc
        self.vs = vs
        self.client = client
        self.license_auth_code = license_auth_code
        self.vm_auth_key_lifetime = vm_auth_key_lifetime

        self.lister = DeviceGroupLister(client)
        self.reconciler = DeviceGroupReconciler(
            client, self.lister,
            create_policy=create_policy,
            delete_policy=delete_policy)

        try:
            self.vm_auth_key = client.generate_vm_auth_key(vm_auth_key_lifetime)["authkey"]
        except pan.xapi.PanXapiError as e:
            raise err.SessionInitError(
                "Failed to generate vm-auth-key for device group %s: %s" % (vs.name, e),
                device_group=vs.name)
        self._logger.debug("Generated vm-auth-key for device group %s" % vs.name)

    @property
    def device_group(self):
        return self.vs.name

    def is_device_group_supported(self):
        return True

    def list_devices(self):
        return self.lister.list_device_groups()

    def get_device_by_id(self, id):
        return self.lister.get(id)

    def find_device_by_name(self, name):
        return name if self.get_device_by_id(name) is not None else None

    def create_vss_device(self):
        """Create the device-group for this virtual system

        Returns:
            str: The device-group name

        """
        self.reconciler.create(self.device_group)
        return self.device_group

    def update_vss_device(self, device):
        self.create_vss_device()

    def delete_vss_device(self):
        return self.reconciler.delete(self.device_group)

    def get_bootstrap_info(self, info):
        builder = BootstrapBuilder(
            self.mc.ip_address,
            self.device_group,
            self.vm_auth_key,
            license_auth_code=self.license_auth_code,
        )
        return builder.build(info)
