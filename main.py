#!/usr/bin/env python3
import importlib
import sys

# name: (module, description)
COMMANDS = {
    "cli": ("cli", "Start the interactive search prompt"),
    "bot": ("bot", "Start the Telegram bot"),
}


def usage() -> str:
    lines = ["Quran Search", "", "Usage:"]
    for name, (_module, description) in COMMANDS.items():
        lines.append(f"  python main.py {name:<5} - {description}")
    return "\n".join(lines)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] not in COMMANDS:
        print(usage())
        return 0 if not args else 2

    module_name, _description = COMMANDS[args[0]]
    # Imported lazily so the CLI runs without a bot token or telegram setup
    module = importlib.import_module(module_name)
    module.main()
    return 0


if __name__ == "__main__":
    sys.exit(main())
