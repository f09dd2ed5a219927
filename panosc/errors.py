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

"""Exception classes used by panosc package"""

from pan.xapi import PanXapiError


class PanoscError(PanXapiError):
    """Base exception for errors raised by the panosc package

    This class is not for errors connecting to the API, as
    pan.xapi.PanXapiError is responsible for those.  Those are
    converted into :class:`PanoscXapiError` subclasses by the
    :class:`panosc.client.PanoramaClient`.

    Attributes:
        message: The error message for the exception
        device_group: Name of the device-group being worked on, if any
    """
    def __init__(self, *args, **kwargs):
        self.device_group = kwargs.pop('device_group', None)
        super(PanoscError, self).__init__(*args, **kwargs)

    @property
    def message(self):
        return self.msg


class PanoscXapiError(PanoscError):
    """General error returned by an API call"""
    pass

class PanInvalidCredentials(PanoscXapiError):
    pass

class PanURLError(PanoscXapiError):
    pass

class PanConnectionTimeout(PanoscXapiError):
    pass

class PanJobTimeout(PanoscXapiError):
    pass

class PanCommitInProgress(PanoscXapiError):
    pass

class PanSessionTimedOut(PanoscXapiError):
    pass

class PanLockError(PanoscXapiError):
    pass


class RemoteQueryError(PanoscError):
    """Listing or querying device-groups on Panorama failed"""
    pass

class CommitError(PanoscError):
    """Panorama rejected or failed a commit

    Attributes:
        result (dict): Parsed commit job results, if the job finished
    """
    def __init__(self, *args, **kwargs):
        self.result = kwargs.pop('result', None)
        super(CommitError, self).__init__(*args, **kwargs)

class CreateTimeoutError(PanoscError):
    """A created device-group never showed up on Panorama"""
    pass

class SessionInitError(PanoscError):
    """The device manager session could not be set up"""
    pass

class BootstrapError(PanoscError):
    """One or more bootstrap files could not be built

    Attributes:
        failures (dict): Bootstrap file path to the exception raised for it
    """
    def __init__(self, *args, **kwargs):
        self.failures = kwargs.pop('failures', {})
        super(BootstrapError, self).__init__(*args, **kwargs)

class Unsupported(PanoscError, NotImplementedError):
    """Operation is part of the device manager interface but not supported"""
    pass
