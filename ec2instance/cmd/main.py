#!/usr/bin/env python3

# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Query the EC2 instance metadata service from the command line."""
import argparse
import logging
import sys

from ec2instance.config import load_config, merge_options
from ec2instance.resource import MetadataResource

LOG = logging.getLogger(__name__)
NAME = "ec2-instance"


def setup_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def resource_options(args) -> dict:
    """Merge command line options over the config file section."""
    cli = {
        "version": args.version,
        "timeout": args.timeout,
        "curl_path": args.curl_path,
        "wget_path": args.wget_path,
    }
    file_opts = load_config(args.config) if args.config else {}
    return merge_options(cli, file_opts)


def handle_args(name, args) -> int:
    """
    Handle the parsed command-line arguments.

    :param name: The name of the utility.
    :param args: The parsed arguments.
    :return: the process exit code.
    """
    LOG.debug(
        "%s called with the following arguments: {action: %s, "
        "version: %s, timeout: %s, config: %s}",
        name,
        args.action,
        args.version,
        args.timeout,
        args.config,
    )
    try:
        opts = resource_options(args)
    except (OSError, ValueError) as e:
        sys.stderr.write("%s: could not load config: %s\n" % (name, e))
        return 1

    resource = MetadataResource(opts)
    if resource.resource_skipped:
        sys.stderr.write("%s: skipped: %s\n" % (name, resource.skip_reason))
        return 1

    if args.action == "transport":
        print(resource.transport.kind.value)
        return 0
    if args.action == "exists":
        found = resource.exists()
        print("true" if found else "false")
        return 0 if found else 1
    if args.action == "get":
        for path in args.paths:
            value = resource.get(path)
            if len(args.paths) > 1:
                print("%s:" % path)
            sys.stdout.write(value)
            if value and not value.endswith("\n"):
                sys.stdout.write("\n")
        return 0
    raise ValueError("Unknown action %s" % args.action)


def get_parser(parser=None):
    """
    Build or extend an arg parser for the ec2-instance utility.

    :param parser: Optional existing ArgumentParser instance representing
        the subcommand.
    :return: ArgumentParser with proper argument configuration.
    """
    if not parser:
        parser = argparse.ArgumentParser(prog=NAME, description=__doc__)

    parser.add_argument(
        "--config",
        help="YAML file with an ec2_instance section of options",
    )
    parser.add_argument(
        "--version",
        help="Metadata API version, 'latest' (default) or e.g. 2016-06-30",
    )
    parser.add_argument(
        "--timeout",
        help="Connect timeout in seconds (default 2)",
    )
    parser.add_argument("--curl-path", help="curl executable to use")
    parser.add_argument("--wget-path", help="wget executable to use")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(title="Action", dest="action")
    subparsers.required = True

    subparsers.add_parser(
        "exists",
        help="Check the host is an EC2 instance (meta-data lists ami-id).",
    )
    get_parser_ = subparsers.add_parser(
        "get",
        help="Print metadata properties, e.g. meta-data/public-ipv4.",
    )
    get_parser_.add_argument("paths", nargs="+", metavar="PATH")
    subparsers.add_parser(
        "transport",
        help="Print the http client that would be used on this host.",
    )

    return parser


def main(argv=None) -> int:
    args = get_parser().parse_args(argv)
    setup_logging(args.debug)
    return handle_args(NAME, args)


if __name__ == "__main__":
    sys.exit(main())
