#!/usr/bin/env python
"""
Configure a small server from flags or APP_* environment variables.

    $ APP_CONFIG_FILE=my-config.toml python examples/command_line.py -port=7777
    host=localhost port=7777 config-file=my-config.toml
"""

import sys

from overridefromenv import ConversionError, FlagParseError, flagset, override_command_line

host = flagset.command_line.string("host", "localhost", "server host")
port = flagset.command_line.int("port", 8080, "server port")
config = flagset.command_line.string("config-file", "config.toml", "config file")


def main() -> int:
    try:
        # Parse first; the override only fills flags left at their default.
        flagset.parse()
        override_command_line("APP")
    except (FlagParseError, ConversionError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(f"host={host.value} port={port.value} config-file={config.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
