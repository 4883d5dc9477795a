"""Package entry point for ``python -m ddl_docgen``.

WHY: Users run the generator as ``python -m ddl_docgen trees.json`` for
CLI mode, or ``python -m ddl_docgen --serve`` to start the HTTP API.

RULES:
- ``--serve`` starts the API server
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from ddl_docgen.server.app import run_api
        run_api()
    else:
        from ddl_docgen.cli import main
        main()
