"""Allow ``python -m wp_move``"""

from .cli.main import main

if __name__ == "__main__":
    main()
