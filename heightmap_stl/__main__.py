"""Allow ``python -m heightmap_stl INPUT OUTPUT``."""
from heightmap_stl.cli.commands.convert import main

if __name__ == "__main__":
    main()
