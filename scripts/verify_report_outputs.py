import subprocess
import sys
from pathlib import Path
import difflib

ROOT = Path(__file__).resolve().parents[1]
GOLDEN = ROOT / "tests" / "golden"

PLAYBOOK = ROOT / "playbooks" / "example.yml"


def run_command(cmd: str) -> str:
    result = subprocess.run(
        cmd,
        shell=True,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        print(result.stdout)
        print(result.stderr)
        sys.exit(result.returncode)
    return result.stdout


def diff(name: str, expected: str, actual: str) -> None:
    if expected == actual:
        print(f"✅ {name}: OK")
        return

    print(f"❌ {name}: CHANGED")
    for line in difflib.unified_diff(
        expected.splitlines(),
        actual.splitlines(),
        fromfile=f"golden/{name}",
        tofile="current",
        lineterm="",
    ):
        print(line)
    sys.exit(1)


def main():
    # --- Full dry run ---
    dry_run_cmd = (
        f"python -m sql_runner.cli "
        f"--playbook {PLAYBOOK} --dry-run --no-notify"
    )
    dry_run_out = run_command(dry_run_cmd)
    dry_run_expected = (GOLDEN / "dry_run.txt").read_text()

    diff("dry_run.txt", dry_run_expected, dry_run_out)

    # --- Dry run from a later step ---
    from_step_cmd = (
        f"python -m sql_runner.cli "
        f"--playbook {PLAYBOOK} --dry-run --no-notify --from-step audit"
    )
    from_step_out = run_command(from_step_cmd)
    from_step_expected = (GOLDEN / "dry_run_from_audit.txt").read_text()

    diff("dry_run_from_audit.txt", from_step_expected, from_step_out)


if __name__ == "__main__":
    main()
