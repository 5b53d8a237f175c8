#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ingest_admin.config.loader import ConfigLoader
from ingest_admin.errors import ConfigError


def main(argv: Optional[list[str]] = None) -> int:
    """Validate a config file (default: config/ingest_admin.yaml) and print the result."""
    args = sys.argv[1:] if argv is None else argv
    config_file = Path(args[0]) if args else None

    print("🔍 Validating ingest admin configuration...")

    try:
        loader = ConfigLoader.create(config_file)
        config = loader.load()
    except ConfigError as e:
        print(f"❌ {e}")
        for error in e.errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        return 1

    source = loader.config_file or "defaults only"
    print(f"📋 Source: {source}")
    print(f"  • inbound: {config.layout.inbound_dirname}")
    print(f"  • locked:  {config.layout.locked_dirname}")
    print(f"  • state:   {config.layout.state_filename}")
    print(f"  • logging: {config.logging.level} ({'json' if config.logging.format_json else 'console'})")
    print("\n🎉 Configuration is valid!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
