"""
CLI Module

Architectural Intent:
- Command-line interface for metalcloud
- Resolves one node per invocation through the composition root
- Supports --verbose/--debug flags for log level control

Commands:
    metadata   print the node's addresses, instance type, region and zone as JSON
    exists     print true/false for the node's providerID
    shutdown   print true/false for whether the device is inactive
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
import traceback
from typing import Optional

from metalcloud.domain.exceptions import MetalCloudError
from metalcloud.domain.value_objects.node_descriptor import NodeDescriptor
from metalcloud.infrastructure.config import load_config
from metalcloud.infrastructure.logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metalcloud",
        description="Resolve cluster nodes against the Equinix Metal device inventory",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs as JSON lines"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to metalcloud.json"
    )
    parser.add_argument(
        "--devices-file",
        default=None,
        help="Resolve against a JSON device fixture file instead of the API",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for name, help_text in (
        ("metadata", "Print instance metadata for a node"),
        ("exists", "Check whether the node's device exists"),
        ("shutdown", "Check whether the node's device is shut down"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--provider-id", "-p", default="", help="Node providerID")
        sub.add_argument("--name", "-n", default="", help="Node name")
        sub.add_argument(
            "--node-ip", default=None, help="Operator-provided internal node IP"
        )
        sub.add_argument(
            "--node-file", "-f", default=None, help="Node manifest (JSON)"
        )
    return parser


def _node_from_args(args: argparse.Namespace) -> NodeDescriptor:
    if args.node_file:
        with open(args.node_file) as f:
            manifest = json.load(f)
        if not isinstance(manifest, dict):
            raise ValueError("expected a JSON object")
        return NodeDescriptor.from_node_object(manifest)
    return NodeDescriptor(
        name=args.name,
        provider_id=args.provider_id,
        override_address=args.node_ip,
    )


async def async_main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.devices_file:
        config = dataclasses.replace(
            config,
            directory=dataclasses.replace(
                config.directory, backend="memory", fixtures_path=args.devices_file
            ),
        )

    # Configure logging based on flags
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = config.log_level
    configure_logging(level=level, json_format=args.json_logs)

    if args.command is None:
        parser.print_help()
        return

    from metalcloud.composition_root import create_container

    try:
        container = create_container(config)
    except (OSError, ValueError) as e:
        print(f"[-] Cannot set up device directory: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        await container.telemetry.initialize()
        try:
            node = _node_from_args(args)
        except FileNotFoundError as e:
            print(f"[-] Node file not found: {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"[-] Invalid node file {args.node_file}: {e}", file=sys.stderr)
            sys.exit(1)

        if args.command == "metadata":
            metadata = await container.instances.instance_metadata(node)
            print(json.dumps(metadata.to_dict(), indent=2))
        elif args.command == "exists":
            print(json.dumps(await container.instances.instance_exists(node)))
        elif args.command == "shutdown":
            print(json.dumps(await container.instances.instance_shutdown(node)))
    except MetalCloudError as e:
        print(f"[-] {args.command} failed: {e}", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        sys.exit(1)
    finally:
        await container.telemetry.export()
        await container.aclose()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
