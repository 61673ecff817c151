"""Main orchestration script for checking and running a cup update."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Initialize configuration if needed, then update annotated versions."""
    parser = argparse.ArgumentParser(
        description="Update annotated version literals in a working tree."
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before updating",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and report without writing files",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Directory to scan",
    )
    parser.add_argument(
        "--report",
        help="Write a JSON report to this path",
    )
    parser.add_argument(
        "--config",
        default="cup.yml",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent
    python_exe = sys.executable

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([python_exe, str(root_dir / "dev.py"), "--ci"])
        print("\n✅ Development checks passed. Proceeding with the update.\n")

    if not Path(args.config).exists():
        print("--- Step 1: Writing default configuration ---")
        run_command([python_exe, "-m", "cup.cli", "--config", args.config, "init"])

    print("\n--- Step 2: Updating annotated versions ---")
    cmd = [python_exe, "-m", "cup.cli", "--config", args.config]
    cmd.extend(["update", "--root", args.root])
    if args.dry_run:
        cmd.append("--dry-run")
    if args.report:
        cmd.extend(["--report", args.report])

    run_command(cmd)

    print(f"\nSUCCESS: Versions checked under {Path(args.root).resolve()}")


if __name__ == "__main__":
    main()
