"""Enable running claude-notify as a module: python -m claude_notify."""

from claude_notify.cli import main

if __name__ == "__main__":
    main()
