"""Main entry point for reconciling structural and documentation records."""

from docrecon.reconcile_cli import main

if __name__ == "__main__":
    raise SystemExit(main())
