"""Input validation for CLI arguments."""
import os
import sys


def validate_input_file(path: str) -> None:
    """
    Validate the request descriptor argument points at a readable file.

    Args:
        path: Path given on the command line

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not path:
        print("Error: Input file path cannot be empty", file=sys.stderr)
        print("\nusage: kgcp-secret FILE", file=sys.stderr)
        sys.exit(2)

    if not os.path.exists(path):
        print(f"Error: Input file does not exist: {path}", file=sys.stderr)
        sys.exit(2)

    if not os.path.isfile(path):
        print(f"Error: Input path is not a file: {path}", file=sys.stderr)
        sys.exit(2)
