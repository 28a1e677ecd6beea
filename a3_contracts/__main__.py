"""
Allow running the checker as a module:

    python -m a3_contracts <target> <interface> [options]

Delegates to a3_contracts.cli:main().
"""
import sys
from .cli import main

sys.exit(main())
