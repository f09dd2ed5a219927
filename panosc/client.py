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


"""Connection to the Panorama XML API

The device manager only needs a handful of API calls: operational
commands, set and delete of configuration, commit, and generating a
vm-auth-key for bootstrapping.  These are thin wrappers over
:class:`pan.xapi.PanXapi` which convert pan-python errors into
:mod:`panosc.errors` exceptions.

"""

import copy
import time
import xml.etree.ElementTree as ET

import pan.xapi
from pan.config import PanConfig

import panosc
import panosc.errors as err
from panosc import isstring, string_or_list

logger = panosc.getlogger(__name__)


XPATH_DEVICE = "/config/devices/entry[@name='localhost.localdomain']"
XPATH_DEVGROUP_PREFIX = XPATH_DEVICE + "/device-group"
ENTRY = "/entry[@name='%s']"


class PanoramaClient(object):
    """A Panorama XML API connection

    Args:
        hostname: Hostname or IP of Panorama for API connections
        api_username: Username of administrator to access API
        api_password: Password of administrator to access API
        api_key: The API Key for connecting to Panorama's API
        port: Port of Panorama for API connections
        tag: .panrc tag to read connection settings from
        timeout: The timeout for asynchronous jobs, such as commits
        interval: The interval to check asynchronous jobs

    """

    CONNECTION_EXCEPTIONS = (
        err.PanConnectionTimeout,
        err.PanURLError,
        err.PanSessionTimedOut,
    )

    def __init__(
        self,
        hostname=None,
        api_username=None,
        api_password=None,
        api_key=None,
        port=443,
        tag=None,
        timeout=1200,
        interval=0.5,
    ):
        self._logger = panosc.getlogger(__name__ + "." + self.__class__.__name__)

        self.hostname = hostname
        self.port = port
        self.tag = tag
        self._api_username = api_username
        self._api_password = api_password
        self._api_key = api_key
        self.timeout = timeout
        self.interval = interval
        self._xapi_private = None

    @property
    def id(self):
        return str(self.hostname or self.tag or "<no-id>")

    @property
    def xapi(self):
        if self._xapi_private is None:
            self._xapi_private = self.generate_xapi()
        return self._xapi_private

    def generate_xapi(self):
        kwargs = {
            "tag": self.tag,
            "api_username": self._api_username,
            "api_password": self._api_password,
            "api_key": self._api_key,
            "hostname": self.hostname,
            "port": self.port,
            "timeout": self.timeout,
        }
        try:
            return pan.xapi.PanXapi(**kwargs)
        except pan.xapi.PanXapiError as e:
            raise self.classify_exception(e)

    def _call(self, method_name, *args, **kwargs):
        method = getattr(self.xapi, method_name)
        try:
            method(*args, **kwargs)
        except pan.xapi.PanXapiError as e:
            raise self.classify_exception(e)
        return copy.deepcopy(self.xapi.element_root)

    def classify_exception(self, e):
        if isinstance(e, err.PanoscError):
            return e
        msg = str(e)
        if msg == "Invalid credentials.":
            return err.PanInvalidCredentials(msg)
        elif msg.startswith("URLError:"):
            if msg.endswith("timed out"):
                return err.PanConnectionTimeout(msg)
            return err.PanURLError(msg)
        elif msg.startswith("timeout waiting for job"):
            return err.PanJobTimeout(msg)
        elif msg.startswith("Another commit/validate is in progress"):
            return err.PanCommitInProgress(msg)
        elif msg.startswith("A commit is in progress."):
            return err.PanCommitInProgress(msg)
        elif msg.startswith("Session timed out"):
            return err.PanSessionTimedOut(msg)
        elif msg.startswith("Configuration is locked by"):
            return err.PanLockError(msg)
        else:
            return err.PanoscXapiError(msg)

    def op(self, cmd=None, cmd_xml=False):
        """Perform operational command on Panorama

        Args:
            cmd (str): The operational command to execute
            cmd_xml (bool): True: cmd is not XML, False: cmd is XML (Default: False)

        Returns:
            xml.etree.ElementTree.Element: The response root

        """
        self._logger.debug2("%s: op: %s" % (self.id, cmd))
        return self._call("op", cmd=cmd, cmd_xml=cmd_xml)

    def set_config(self, xpath, element):
        """Add or merge an element into the candidate configuration

        Returns:
            str: API response status

        """
        if not isstring(element):
            element = ET.tostring(element, encoding="unicode")
        self._logger.debug("%s: set: %s %s" % (self.id, xpath, element))
        self._call("set", xpath=xpath, element=element)
        return self.xapi.status

    def delete_config(self, xpath):
        """Remove an xpath from the candidate configuration

        Returns:
            str: API response status

        """
        self._logger.debug("%s: delete: %s" % (self.id, xpath))
        self._call("delete", xpath=xpath)
        return self.xapi.status

    def commit(self, message=None, cmd=None):
        """Commit the candidate configuration and wait for the job

        Args:
            message (str): Error message to use if the commit fails
            cmd (str): Commit options in XML format

        Raises:
            CommitError

        Returns:
            dict: Commit results, or None if no commit was needed

        """
        if message is None:
            message = "Commit failed on %s" % (self.id,)
        if cmd is None:
            cmd = "<commit></commit>"

        self._logger.debug("Commit initiated on device: %s" % (self.id,))
        try:
            commit_response = self._call("commit", cmd=cmd, sync=False)
        except pan.xapi.PanXapiError as e:
            raise err.CommitError("%s: %s" % (message, e))

        try:
            jobid = commit_response.find("./result/job").text
        except AttributeError:
            self._logger.debug("%s: commit not needed" % (self.id,))
            return

        try:
            result = self.syncjob(jobid)
        except pan.xapi.PanXapiError as e:
            raise err.CommitError("%s: %s" % (message, e))

        if not result["success"]:
            self._logger.debug(
                "Commit failed - device: %s, job: %s, messages: %s"
                % (self.id, result["jobid"], result["messages"])
            )
            raise err.CommitError(message, result=result)

        self._logger.debug(
            "Commit succeeded - device: %s, job: %s, messages: %s"
            % (self.id, result["jobid"], result["messages"])
        )
        return result

    def syncjob(self, job_id):
        """Block until job completes and return result

        Args:
            job_id (str): job ID

        Returns:
            dict: Job result

        """
        cmd = 'show jobs id "%s"' % job_id
        start_time = time.time()

        self._logger.debug("Waiting for job %s to finish..." % job_id)

        while True:
            job_xml = self.op(cmd, cmd_xml=True)
            status = job_xml.find("./result/job/status")
            if status is None:
                raise err.PanoscXapiError("No status element in '%s' response" % cmd)
            if status.text == "FIN":
                return self._parse_job_results(job_xml)

            self._logger.debug2("Job %s status %s" % (job_id, status.text))

            if (
                self.timeout is not None
                and self.timeout != 0
                and time.time() > start_time + self.timeout
            ):
                raise err.PanJobTimeout("Timeout waiting for job %s completion" % job_id)

            time.sleep(self.interval)

    def _parse_job_results(self, show_job_xml):
        pconf = PanConfig(config=show_job_xml)
        job_response = pconf.python()
        try:
            job = job_response["response"]["result"]["job"]
        except (KeyError, TypeError):
            raise err.PanoscXapiError("Can't get job results, error parsing results xml")

        try:
            messages = job["details"]["line"]
        except (KeyError, TypeError):
            messages = []
        if isstring(messages):
            messages = string_or_list(messages)

        return {
            "success": job.get("result") == "OK",
            "result": job.get("result"),
            "jobid": job.get("id"),
            "messages": messages,
        }

    def generate_vm_auth_key(self, lifetime):
        """Generates a VM auth key to be placed in a VM's init-cfg.txt.

        Args:
            lifetime(int): The lifetime (in hours).

        Raises:
            PanoscError

        Returns:
            dict: has "authkey" and "expires" keys.

        """
        cmd = 'request bootstrap vm-auth-key generate lifetime "{0}"'

        resp = self.op(cmd.format(lifetime), cmd_xml=True)

        data = resp.find('./result')
        if data is None or not data.text:
            raise err.PanoscXapiError('No result in returned XML')

        # VM auth key 123456789 generated. Expires at: 2017/12/30 12:00:00
        tokens = data.text.split()
        try:
            ans = {
                'authkey': tokens[3],
                'expires': ' '.join(tokens[-2:]).rstrip(),
            }
        except IndexError:
            raise err.PanoscXapiError('Unexpected vm-auth-key result: %s' % data.text)

        return ans
