"""Fund Site Builder package.

This module serves as the root of the Fund Site Builder Python package, which
reads the investment fund's website content from Airtable and renders it into
a self-contained static site (HTML pages, downloaded images and the static
asset tree) ready for a static host.

The package keeps the launcher (``build_site.py``), the command line layer
(`pipeline/site_builder/cli.py`) and the headless pipeline apart, so each step
can be driven and tested on its own.

Package Structure
-----------------
- `pipeline/airtable/`:
    Environment-driven configuration and the asynchronous, paginating
    records client.
- `pipeline/assets/`:
    Image attachment downloads and static directory copying.
- `pipeline/site_builder/`:
    Record grouping and stats, Jinja2 rendering, the async build runner and
    its CLI.
- `config.py`: All configuration constants (paths, table names, limits), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import src
>>> # See build_site.py or src/pipeline/site_builder/cli.py for entrypoints.

"""
