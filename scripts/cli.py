"""
CLI to score mouth openness in images -> JSON.
"""
from mouthstate.cli import main

if __name__ == "__main__":
    main()
