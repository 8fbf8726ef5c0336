"""Allow ``python -m lowlevel_skills``."""

from lowlevel_skills.store.cli import main

if __name__ == "__main__":
    main()
