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


"""Create and delete device-groups on Panorama

A device-group change is not visible in ``show devicegroups`` as soon as
the commit job finishes, so after committing, the reconciler polls until
the device-group shows up (or goes away).

"""

import time
import xml.etree.ElementTree as ET

import panosc
import panosc.errors as err
from panosc import enum
from panosc.client import XPATH_DEVGROUP_PREFIX, ENTRY

logger = panosc.getlogger(__name__)


Outcome = enum(
    "ALREADY_EXISTS",
    "CREATED",
    "CREATE_FAILED",
    "ALREADY_ABSENT",
    "DELETED",
    "DELETE_TIMED_OUT",
)

DEVICE_GROUP_DESCRIPTION = "OSC Device group - do not remove"


class PollPolicy(object):
    """Fixed interval polling with a bounded number of attempts

    Args:
        interval (float): Seconds to sleep between attempts
        max_attempts (int): Attempts before giving up
        escalate_after (int): Warn on every attempt after this one.  None
            to never warn.

    """
    def __init__(self, interval=1.0, max_attempts=900, escalate_after=30):
        if interval < 0:
            raise ValueError("Invalid interval: %s" % interval)
        if max_attempts < 0:
            raise ValueError("Invalid max_attempts: %s" % max_attempts)
        self.interval = interval
        self.max_attempts = max_attempts
        self.escalate_after = escalate_after

    def __repr__(self):
        return "PollPolicy(interval=%r, max_attempts=%r, escalate_after=%r)" % (
            self.interval, self.max_attempts, self.escalate_after)

    def sleep(self):
        if self.interval:
            time.sleep(self.interval)


CREATE_POLICY = PollPolicy(1.0, 900, 30)
DELETE_POLICY = PollPolicy(1.0, 30, None)


class DeviceGroupReconciler(object):
    """Makes a device-group exist or not exist on Panorama

    Args:
        client (PanoramaClient): Connection to Panorama
        lister (DeviceGroupLister): Device-group lister using the same client
        create_policy (PollPolicy): How long to wait for a new device-group
        delete_policy (PollPolicy): How long to wait for a device-group to go away
        description (str): Description set on created device-groups

    """
    def __init__(self, client, lister, create_policy=None, delete_policy=None,
                 description=DEVICE_GROUP_DESCRIPTION):
        self._logger = panosc.getlogger(__name__ + "." + self.__class__.__name__)
        self.client = client
        self.lister = lister
        self.create_policy = create_policy or CREATE_POLICY
        self.delete_policy = delete_policy or DELETE_POLICY
        self.description = description

    def element(self, name):
        entry = ET.Element("entry", {"name": name})
        if self.description is not None:
            ET.SubElement(entry, "description").text = self.description
        ET.SubElement(entry, "devices")
        return entry

    def xpath(self, name):
        return XPATH_DEVGROUP_PREFIX + ENTRY % name

    def create(self, name):
        """Create the device-group and wait until Panorama reports it

        Raises:
            CommitError: The commit failed
            CreateTimeoutError: The device-group never showed up

        Returns:
            Outcome.ALREADY_EXISTS or Outcome.CREATED

        """
        self._logger.info("Adding device group %s" % name)

        if self.lister.exists(name):
            self._logger.error("Device group %s already exists!" % name)
            return Outcome.ALREADY_EXISTS

        self.client.set_config(XPATH_DEVGROUP_PREFIX, self.element(name))
        self.client.commit(
            "Commit failed when adding Device Group Name: %s" % name)

        policy = self.create_policy
        found = self.lister.exists(name)
        for i in range(policy.max_attempts):
            if found:
                break
            policy.sleep()
            if policy.escalate_after is not None and i > policy.escalate_after:
                self._logger.warning(
                    "Device group %s still not added after %d seconds. "
                    "Will keep trying for %d seconds"
                    % (name, (i + 1) * policy.interval,
                       (policy.max_attempts - i - 1) * policy.interval))
            found = self.lister.exists(name)

        if not found:
            raise err.CreateTimeoutError(
                "Failed to add the device group after multiple tries: %s" % name,
                device_group=name)

        self._logger.info("Device group %s added successfully." % name)
        return Outcome.CREATED

    def update(self, name):
        """Same as :meth:`create`, nothing on an existing device-group is changed"""
        return self.create(name)

    def delete(self, name):
        """Delete the device-group and wait until Panorama stops reporting it

        A device-group that is still listed after the delete policy runs
        out is logged, not raised.

        Raises:
            CommitError: The commit failed

        Returns:
            Outcome.ALREADY_ABSENT, Outcome.DELETED or Outcome.DELETE_TIMED_OUT

        """
        self._logger.info("Deleting device group %s" % name)

        if not self.lister.exists(name):
            self._logger.error("Device group %s does not exist!" % name)
            return Outcome.ALREADY_ABSENT

        self.client.delete_config(self.xpath(name))
        self.client.commit(
            "Commit failed when deleting Device Group Name: %s. "
            "Does it contain objects?" % name)

        policy = self.delete_policy
        found = self.lister.exists(name)
        for i in range(policy.max_attempts):
            if not found:
                break
            policy.sleep()
            found = self.lister.exists(name)

        if found:
            self._logger.error(
                "Failed to delete %s. Delete manually from the appliance!" % name)
            return Outcome.DELETE_TIMED_OUT

        self._logger.info("Device group %s deleted successfully." % name)
        return Outcome.DELETED
