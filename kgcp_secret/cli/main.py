"""CLI entrypoint for kgcp-secret."""
import sys
import argparse
import logging

from .validators import validate_input_file

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Send log output to stderr so stdout carries only the manifest."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr
    )


def cmd_generate(args):
    """Resolve the secrets named in the input file and print the Secret manifest."""
    from kgcp_secret.secrets.workflows.secret_operations import process_file

    validate_input_file(args.file)
    output = process_file(args.file)
    sys.stdout.write(output)


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Processing errors (invalid input, secret not found, GCP failures, etc.)
        2 - Usage errors (missing or unreadable input file argument)
    """
    parser = argparse.ArgumentParser(
        prog="kgcp-secret",
        description="Generate a Kubernetes Secret from values stored in GCP Secret Manager",
        epilog="""
Each key listed in the input file is looked up with the most specific
name available, for example for name=app, namespace=ns, stage=prod, dc=eu1:

  ns_app_KEY_prod_eu1, ns_app_KEY_prod, ns_app_KEY_eu1, ns_app_KEY,
  app_KEY_prod_eu1, ...,  ns_KEY_prod_eu1, ..., KEY_prod_eu1, ..., KEY

Exit codes:
  0 - Success
  1 - Processing error (invalid input, secret not found, GCP failures, etc.)
  2 - Usage error (missing or unreadable input file argument)

Environment variables:
  GCP_PROJECT - GCP project ID used when the input has no gcpProjectID
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "file",
        help="Path to the KGCPSecret YAML input file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log lookup details to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"kgcp-secret {VERSION}"
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        cmd_generate(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        message = " ".join(str(e).splitlines())
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
