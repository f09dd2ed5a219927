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

"""
devicegroup.py
==============

Create or delete the device-group for a virtual system on Panorama, and
optionally write the bootstrap package for a firewall in that
device-group to a directory.

**Usage**::

    devicegroup.py [-h] [-v] [-q] [-d] [-b FIREWALL] [-o DIR] hostname username password devicegroup

**Examples**:

Create device-group vss-A on the Panorama at 10.0.0.5 and write the
bootstrap files for firewall fw1 to ./fw1::

    $ python devicegroup.py -b fw1 -o fw1 10.0.0.5 admin password vss-A

Delete device-group vss-A::

    $ python devicegroup.py -d 10.0.0.5 admin password vss-A

"""

import sys
import os
import argparse
import logging

curpath = os.path.dirname(os.path.abspath(__file__))
sys.path[:0] = [os.path.join(curpath, os.pardir)]

from panosc.client import PanoramaClient
from panosc.elements import BootstrapInfo, ManagerConnector, VirtualSystem
from panosc.manager import PanoramaDeviceApi
from panosc.reconcile import Outcome


def main():

    # Get command line arguments
    parser = argparse.ArgumentParser(description="Manage the device-group of a virtual system on Panorama")
    parser.add_argument('-v', '--verbose', action='count', help="Verbose (-vv for extra verbose)")
    parser.add_argument('-q', '--quiet', action='store_true', help="No output")
    parser.add_argument('-d', '--delete', action='store_true', help="Delete the device-group instead of creating it")
    parser.add_argument('-b', '--bootstrap', metavar='FIREWALL', help="Build the bootstrap package for this firewall")
    parser.add_argument('-o', '--output', metavar='DIR', default='.', help="Directory to write bootstrap files to")
    # Palo Alto Networks related arguments
    pano_group = parser.add_argument_group('Panorama')
    pano_group.add_argument('hostname', help="Hostname of Panorama")
    pano_group.add_argument('username', help="Username for Panorama")
    pano_group.add_argument('password', help="Password for Panorama")
    pano_group.add_argument('devicegroup', help="Device-group (virtual system) name")
    args = parser.parse_args()

    ### Set up logger
    if args.verbose is None:
        args.verbose = 0
    if not args.quiet:
        logging_level = 20 - (args.verbose * 10)
        if logging_level <= logging.DEBUG:
            logging_format = '%(levelname)s:%(name)s:%(message)s'
        else:
            logging_format = '%(message)s'
        logging.basicConfig(format=logging_format, level=logging_level)

    client = PanoramaClient(args.hostname, args.username, args.password)
    api = PanoramaDeviceApi(
        ManagerConnector(args.hostname, args.hostname),
        VirtualSystem(args.devicegroup),
        client,
    )

    with api:
        if args.delete:
            outcome = api.delete_vss_device()
            logging.info("Delete result: %s" % Outcome.reverse_mapping[outcome])
            return

        api.create_vss_device()

        if args.bootstrap is not None:
            package = api.get_bootstrap_info(BootstrapInfo(args.bootstrap))
            for path, content in package.files.items():
                filename = os.path.join(args.output, path.lstrip('/'))
                if not content:
                    # Empty content and software directories
                    if not os.path.isdir(filename):
                        os.makedirs(filename)
                    continue
                dirname = os.path.dirname(filename)
                if not os.path.isdir(dirname):
                    os.makedirs(dirname)
                with open(filename, 'wb') as f:
                    f.write(content)
                logging.info("Wrote %s" % filename)


# Call the main() function to begin the program if not
# loaded as a module.
if __name__ == '__main__':
    main()
