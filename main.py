"""Development launcher for the hex permutation palette.

Usage
-----
$ pip install -e .
$ python main.py                 # starts on http://127.0.0.1:5000

Settings can be overridden with HEXPERM_* environment variables, e.g.
HEXPERM_PAGE_SIZE=200 or HEXPERM_DEBOUNCE_MS=300.
"""

from hex_permutations.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=True, threaded=True)
