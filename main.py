"""
Interactive Linear Regression Explorer.

Run with ``python main.py`` or the ``linreg-explorer`` console script.
"""

from linreg_explorer.main import main


if __name__ == "__main__":
    main()
