"""Top-level package for FamFinance.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``calculations`` – budget rule, goal, portfolio and projection formulas
* ``formatters`` – pt-BR currency, number and date rendering
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run famfinance/dashboard.py
```

or use ``run_dashboard.py`` at the repository root.
"""

from . import calculations  # noqa: F401  # re-exported for convenience
from . import formatters  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience

__all__ = ["calculations", "formatters", "visualization"]
