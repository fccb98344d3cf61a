"""
CLI entry point, when used as a module: `python -m kubexample`.

Useful for debugging in the IDEs (use the start-mode "Module", module "kubexample").
"""
from kubexample import cli

if __name__ == '__main__':
    cli.main()
