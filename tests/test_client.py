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

from unittest import mock
import itertools
import unittest
import xml.etree.ElementTree as ET

import pan.xapi
import panosc.errors as err
from panosc.client import PanoramaClient, XPATH_DEVGROUP_PREFIX


COMMIT_JOB = """
<response status="success" code="19">
    <result>
        <msg><line>Commit job enqueued with jobid 7</line></msg>
        <job>7</job>
    </result>
</response>"""

COMMIT_NOT_NEEDED = """
<response status="success" code="19">
    <msg>There are no changes to commit.</msg>
</response>"""

JOB_ACT = """
<response status="success">
    <result>
        <job>
            <id>7</id>
            <type>Commit</type>
            <status>ACT</status>
            <result>PEND</result>
        </job>
    </result>
</response>"""

JOB_FIN = """
<response status="success">
    <result>
        <job>
            <id>7</id>
            <type>Commit</type>
            <status>FIN</status>
            <result>{0}</result>
            <details>
                <line>{1}</line>
            </details>
        </job>
    </result>
</response>"""

VM_AUTH_KEY = """
<response status="success">
    <result>VM auth key 755036225328715 generated. Expires at: 2017/01/21 08:10:40</result>
</response>"""


class TestPanoramaClient(unittest.TestCase):
    def setUp(self):
        self.client = PanoramaClient("127.0.0.1", api_key="secret", interval=0)
        self.xapi = mock.Mock()
        self.xapi.element_root = None
        self.client._xapi_private = self.xapi

    def respond(self, *documents):
        """Each xapi call sets element_root to the next document"""
        roots = iter([ET.fromstring(d) for d in documents])

        def side_effect(*args, **kwargs):
            self.xapi.element_root = next(roots)

        return side_effect

    def test_id_is_hostname(self):
        self.assertEqual("127.0.0.1", self.client.id)

    def test_id_falls_back_to_tag(self):
        client = PanoramaClient(tag="pano")

        self.assertEqual("pano", client.id)

    def test_generate_xapi(self):
        client = PanoramaClient("127.0.0.1", "admin", "admin", port=8443, tag="pano")

        with mock.patch("pan.xapi.PanXapi") as m:
            ret_val = client.xapi

        self.assertEqual(m.return_value, ret_val)
        m.assert_called_once_with(
            tag="pano",
            api_username="admin",
            api_password="admin",
            api_key=None,
            hostname="127.0.0.1",
            port=8443,
            timeout=1200,
        )

    def test_generate_xapi_error_is_classified(self):
        client = PanoramaClient()

        with mock.patch("pan.xapi.PanXapi") as m:
            m.side_effect = pan.xapi.PanXapiError("hostname argument required")
            with self.assertRaises(err.PanoscXapiError):
                client.xapi

    def test_op_returns_copy_of_response(self):
        self.xapi.op.side_effect = self.respond(
            '<response status="success"><result><foo>bar</foo></result></response>')

        ret_val = self.client.op("<show><foo/></show>")

        self.xapi.op.assert_called_once_with(cmd="<show><foo/></show>", cmd_xml=False)
        self.assertEqual("bar", ret_val.findtext("result/foo"))
        self.assertIsNot(self.xapi.element_root, ret_val)

    def test_op_invalid_credentials(self):
        self.xapi.op.side_effect = pan.xapi.PanXapiError("Invalid credentials.")

        self.assertRaises(err.PanInvalidCredentials, self.client.op, "<show/>")

    def test_classify_exception(self):
        fixtures = [
            ("URLError: reason: timed out", err.PanConnectionTimeout),
            ("URLError: reason: [Errno 111] Connection refused", err.PanURLError),
            ("A commit is in progress.", err.PanCommitInProgress),
            ("Session timed out", err.PanSessionTimedOut),
            ("Configuration is locked by admin", err.PanLockError),
            ("something else", err.PanoscXapiError),
        ]

        for msg, expected in fixtures:
            ret_val = self.client.classify_exception(pan.xapi.PanXapiError(msg))
            self.assertEqual(expected, type(ret_val))
            self.assertEqual(msg, str(ret_val))

    def test_classify_exception_keeps_panosc_errors(self):
        e = err.CommitError("boom")

        self.assertIs(e, self.client.classify_exception(e))

    def test_set_config_serializes_element(self):
        self.xapi.status = "success"
        element = ET.Element("entry", {"name": "dg1"})
        ET.SubElement(element, "devices")

        ret_val = self.client.set_config(XPATH_DEVGROUP_PREFIX, element)

        self.assertEqual("success", ret_val)
        self.xapi.set.assert_called_once_with(
            xpath=XPATH_DEVGROUP_PREFIX,
            element='<entry name="dg1"><devices /></entry>',
        )

    def test_set_config_with_string(self):
        self.xapi.status = "success"

        self.client.set_config(XPATH_DEVGROUP_PREFIX, '<entry name="dg1"/>')

        self.xapi.set.assert_called_once_with(
            xpath=XPATH_DEVGROUP_PREFIX, element='<entry name="dg1"/>')

    def test_delete_config(self):
        self.xapi.status = "success"
        xpath = XPATH_DEVGROUP_PREFIX + "/entry[@name='dg1']"

        ret_val = self.client.delete_config(xpath)

        self.assertEqual("success", ret_val)
        self.xapi.delete.assert_called_once_with(xpath=xpath)

    def test_delete_config_no_such_node(self):
        self.xapi.delete.side_effect = pan.xapi.PanXapiError("Object doesn't exist")

        self.assertRaises(err.PanoscXapiError, self.client.delete_config, "/config")

    def test_commit_success(self):
        self.xapi.commit.side_effect = self.respond(COMMIT_JOB)
        self.xapi.op.side_effect = self.respond(
            JOB_ACT, JOB_FIN.format("OK", "Configuration committed successfully"))

        ret_val = self.client.commit("failed")

        self.xapi.commit.assert_called_once_with(cmd="<commit></commit>", sync=False)
        self.assertEqual(2, self.xapi.op.call_count)
        self.xapi.op.assert_called_with(cmd='show jobs id "7"', cmd_xml=True)
        self.assertTrue(ret_val["success"])
        self.assertEqual("7", ret_val["jobid"])
        self.assertEqual(["Configuration committed successfully"], ret_val["messages"])

    def test_commit_failed_job_raises_with_message(self):
        self.xapi.commit.side_effect = self.respond(COMMIT_JOB)
        self.xapi.op.side_effect = self.respond(
            JOB_FIN.format("FAIL", "Validation Error"))

        with self.assertRaises(err.CommitError) as cm:
            self.client.commit("Commit failed when adding Device Group Name: dg1")

        self.assertEqual("Commit failed when adding Device Group Name: dg1", str(cm.exception))
        self.assertFalse(cm.exception.result["success"])
        self.assertEqual(["Validation Error"], cm.exception.result["messages"])

    def test_commit_api_error_raises_commit_error(self):
        self.xapi.commit.side_effect = pan.xapi.PanXapiError("A commit is in progress.")

        with self.assertRaises(err.CommitError) as cm:
            self.client.commit("Commit failed")

        self.assertTrue(str(cm.exception).startswith("Commit failed: "))
        self.assertIn("A commit is in progress.", str(cm.exception))

    def test_commit_not_needed(self):
        self.xapi.commit.side_effect = self.respond(COMMIT_NOT_NEEDED)

        ret_val = self.client.commit()

        self.assertIsNone(ret_val)
        self.assertFalse(self.xapi.op.called)

    def test_syncjob_timeout(self):
        self.client.timeout = 0.0001
        self.xapi.op.side_effect = lambda *args, **kwargs: setattr(
            self.xapi, "element_root", ET.fromstring(JOB_ACT))

        with mock.patch("panosc.client.time.sleep"):
            with mock.patch("panosc.client.time.time", side_effect=itertools.count()):
                self.assertRaises(err.PanJobTimeout, self.client.syncjob, "7")

    def test_generate_vm_auth_key(self):
        self.xapi.op.side_effect = self.respond(VM_AUTH_KEY)

        ret_val = self.client.generate_vm_auth_key(8760)

        self.xapi.op.assert_called_once_with(
            cmd='request bootstrap vm-auth-key generate lifetime "8760"', cmd_xml=True)
        self.assertEqual("755036225328715", ret_val["authkey"])
        self.assertEqual("2017/01/21 08:10:40", ret_val["expires"])

    def test_generate_vm_auth_key_without_result(self):
        self.xapi.op.side_effect = self.respond('<response status="success"/>')

        self.assertRaises(err.PanoscXapiError, self.client.generate_vm_auth_key, 8760)


if __name__ == "__main__":
    unittest.main()
