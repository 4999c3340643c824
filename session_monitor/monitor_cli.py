"""
Claude Session Monitor - CLI entry point.
Provides server (start, shutdown, status) and session (owner, open, stop,
resume, rename) subcommands.
"""

import argparse
import logging
import os
import signal
import subprocess
import sys

from .constants import DEFAULT_PORT, LOCALHOST

PKG_DIR = os.path.dirname(os.path.abspath(__file__))
PID_FILE = os.path.join(PKG_DIR, ".monitor.pid")

from .__version__ import __version__  # noqa: E402
from .actions import open_session, resume_session, stop_session  # noqa: E402
from .config import get_config  # noqa: E402
from .errors import SessionActionError  # noqa: E402
from .names import CustomNames  # noqa: E402
from .process_tree import describe_ancestry, resolve_owner  # noqa: E402

BANNER = f"""\
  Claude Session Monitor v{__version__}
  API at http://localhost:{{port}}/docs
"""


def _read_pid_file() -> int | None:
    """Read PID from the PID file, returning None if corrupt or missing."""
    if not os.path.exists(PID_FILE):
        return None
    try:
        with open(PID_FILE, encoding="utf-8") as f:
            return int(f.read().strip())
    except (ValueError, OSError):
        return None


def _run_server(port):
    import uvicorn

    uvicorn.run(
        "session_monitor.session_api:app",
        host=LOCALHOST,
        port=port,
        log_level="warning",
    )


# ── Server lifecycle ─────────────────────────────────────────────────────────


def cmd_serve(args):
    """Internal: run the uvicorn server in-process (used by --background)."""
    _run_server(args.port)


def cmd_start(args):
    """Start the API server."""
    old_pid = _read_pid_file()
    if old_pid is not None:
        try:
            os.kill(old_pid, 0)
            print(f"Monitor already running (PID {old_pid}) at http://localhost:{args.port}")
            return 0
        except OSError:
            os.remove(PID_FILE)

    if args.background:
        cmd = [
            sys.executable,
            "-m",
            "session_monitor.monitor_cli",
            "_serve",
            "--port",
            str(args.port),
        ]
        proc = subprocess.Popen(  # pylint: disable=consider-using-with
            cmd,
            cwd=os.path.dirname(PKG_DIR),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
        with open(PID_FILE, "w", encoding="utf-8") as f:
            f.write(str(proc.pid))
        print(f"Monitor started in background (PID {proc.pid})")
        print(BANNER.format(port=args.port))
        return 0

    # Foreground - write PID for status checks, run directly
    with open(PID_FILE, "w", encoding="utf-8") as f:
        f.write(str(os.getpid()))
    try:
        print(BANNER.format(port=args.port))
        _run_server(args.port)
    finally:
        if os.path.exists(PID_FILE):
            os.remove(PID_FILE)
    return 0


def cmd_shutdown(_args):
    """Stop the background API server."""
    pid = _read_pid_file()
    if pid is None:
        print("Monitor is not running (no PID file found).")
        return 0

    try:
        os.kill(pid, signal.SIGTERM)
        print(f"Monitor stopped (PID {pid}).")
    except OSError as e:
        print(f"Could not stop process {pid}: {e}")
    finally:
        if os.path.exists(PID_FILE):
            os.remove(PID_FILE)
    return 0


def cmd_status(_args):
    """Check if the API server is running."""
    pid = _read_pid_file()
    if pid is None:
        print("Monitor is not running.")
        return 0

    try:
        os.kill(pid, 0)
        print(f"Monitor is running (PID {pid})")
    except OSError:
        print("Monitor PID file exists but process is not running. Cleaning up.")
        os.remove(PID_FILE)
    return 0


# ── Session actions ──────────────────────────────────────────────────────────


def cmd_owner(args):
    """Print the application hosting a PID, with the ancestry when verbose."""
    print(resolve_owner(args.pid))
    if args.verbose:
        for record in describe_ancestry(args.pid):
            print(f"  PID {record.pid} (parent {record.parent_pid}) {record.command}")
    return 0


def cmd_open(args):
    app = open_session(args.pid, args.project_path, get_config())
    print(f"Focused: {app}")
    return 0


def cmd_stop(args):
    stop_session(args.pid)
    print(f"Interrupted PID {args.pid}")
    return 0


def cmd_resume(args):
    pid = resume_session(args.session_id, args.prompt, get_config())
    print(f"Prompt sent to {args.session_id} (PID {pid})")
    return 0


def cmd_rename(args):
    names = CustomNames.load(get_config().names_path)
    names.set(args.session_id, args.name.strip())
    names.save()
    print(f"Renamed {args.session_id}" if args.name.strip() else f"Cleared {args.session_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-session-monitor",
        description="Claude Session Monitor - focus, interrupt, and resume Claude CLI sessions",
        epilog=(
            "Examples:\n"
            "  claude-session-monitor start -b                 Start the API in background\n"
            "  claude-session-monitor owner 4242               Which app hosts PID 4242\n"
            "  claude-session-monitor open 4242 ~/src/widget   Focus its window\n"
            "  claude-session-monitor stop 4242                Send Ctrl-C\n"
            '  claude-session-monitor resume <id> "continue"   Send a follow-up prompt\n'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    start_p = sub.add_parser("start", help="Start the monitor API server")
    start_p.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port to listen on (default: {DEFAULT_PORT})",
    )
    start_p.add_argument(
        "--background", "-b", action="store_true", help="Run as a background process (detached)"
    )
    sub.add_parser("shutdown", help="Stop the background API server")
    sub.add_parser("status", help="Check if the API server is running")

    serve_p = sub.add_parser("_serve", help=argparse.SUPPRESS)
    serve_p.add_argument("--port", type=int, default=DEFAULT_PORT)

    owner_p = sub.add_parser("owner", help="Show which terminal or IDE hosts a process")
    owner_p.add_argument("pid", type=int)

    open_p = sub.add_parser("open", help="Focus the window hosting a session")
    open_p.add_argument("pid", type=int)
    open_p.add_argument("project_path", nargs="?", default="")

    stop_p = sub.add_parser("stop", help="Interrupt a session (SIGINT)")
    stop_p.add_argument("pid", type=int)

    resume_p = sub.add_parser("resume", help="Continue a session with a prompt")
    resume_p.add_argument("session_id")
    resume_p.add_argument("prompt")

    rename_p = sub.add_parser("rename", help="Set a session's display name ('' clears it)")
    rename_p.add_argument("session_id")
    rename_p.add_argument("name")

    return parser


COMMANDS = {
    "start": cmd_start,
    "_serve": cmd_serve,
    "shutdown": cmd_shutdown,
    "status": cmd_status,
    "owner": cmd_owner,
    "open": cmd_open,
    "stop": cmd_stop,
    "resume": cmd_resume,
    "rename": cmd_rename,
}


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if not args.command:
        parser.print_help()
        return 0

    try:
        return COMMANDS[args.command](args)
    except (SessionActionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
