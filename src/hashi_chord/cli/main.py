"""
hashi-chord CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import initialize, links, render


@click.group()
@click.version_option(package_name="hashi-chord")
def main():
    """hashi-chord: cross-chain header propagation chord diagrams.

    \b
    Quick Start:
      hashi-chord render --open
      hashi-chord render --testnet -o testnet.html
      hashi-chord links --data '[{"source_chain": "bnb", "target_chain": "gnosis"}]'
    """
    pass


# Register commands
main.add_command(render.render)
main.add_command(links.links)
main.add_command(initialize.init)

if __name__ == "__main__":
    main()
