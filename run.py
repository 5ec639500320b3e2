"""
Unified entry point for WorkforceManager.
Starts the backend API server and applies database migrations.

Features:
- Colored log output with timestamps
- Health check to verify the API is running
- Port auto-detection if default port is in use
- Graceful shutdown with timeout handling
"""

import argparse
import asyncio
import os
import socket
import subprocess
import sys
import time
from datetime import datetime
from pathlib import Path


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.absolute()


def log(level: str, message: str, color: str = Colors.WHITE) -> None:
    """
    Log a message with timestamp, level, and color.

    Args:
        level: Log level (INFO, WARN, ERROR, SUCCESS)
        message: Message to log
        color: ANSI color code for the message
    """
    timestamp = datetime.now().strftime("%H:%M:%S")
    level_colored = {
        "INFO": f"{Colors.BLUE}{level}{Colors.RESET}",
        "WARN": f"{Colors.YELLOW}{level}{Colors.RESET}",
        "ERROR": f"{Colors.RED}{level}{Colors.RESET}",
        "SUCCESS": f"{Colors.GREEN}{level}{Colors.RESET}",
    }.get(level.upper(), level)

    print(f"{Colors.DIM}[{timestamp}]{Colors.RESET} {level_colored}: {color}{message}{Colors.RESET}")


def log_info(message: str) -> None:
    log("INFO", message, Colors.WHITE)


def log_warn(message: str) -> None:
    log("WARN", message, Colors.YELLOW)


def log_error(message: str) -> None:
    log("ERROR", message, Colors.RED)


def log_success(message: str) -> None:
    log("SUCCESS", message, Colors.GREEN)


def is_port_available(host: str, port: int) -> bool:
    """
    Check if a port is available.

    Returns:
        True if port is available, False otherwise
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
            return True
        except OSError:
            return False


def find_available_port(host: str, start_port: int, max_attempts: int = 100) -> int:
    """Find an available port starting from start_port."""
    for port in range(start_port, start_port + max_attempts):
        if is_port_available(host, port):
            return port
    raise RuntimeError(f"No available port found in range {start_port}-{start_port + max_attempts}")


async def check_backend_health(host: str, port: int, timeout: int = 10) -> bool:
    """
    Check if backend API is healthy.

    Returns:
        True if /health answers without a server error
    """
    import aiohttp

    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(f"http://{host}:{port}/health", timeout=timeout) as response:
                return response.status < 500
    except (aiohttp.ClientError, asyncio.TimeoutError):
        return False


def run_migrations() -> int:
    """Apply alembic migrations up to head."""
    log_info("Applying database migrations...")
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=get_project_root(),
    )
    if result.returncode == 0:
        log_success("Database is up to date")
    else:
        log_error("Migration failed")
    return result.returncode


def start_backend(port: int = 8000, host: str = "127.0.0.1", reload: bool = True) -> subprocess.Popen:
    """
    Start the FastAPI backend server.

    Args:
        port: Port to run on
        host: Host to bind to
        reload: Enable auto-reload

    Returns:
        Subprocess object
    """
    cmd = [
        sys.executable, "-m", "uvicorn",
        "backend.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")

    log_info(f"Starting backend on http://{host}:{port}")
    return subprocess.Popen(cmd, cwd=get_project_root(), env=os.environ.copy())


def print_status(host: str, backend_port: int):
    """Print running services status."""
    print(f"\n{Colors.BOLD}{'=' * 58}{Colors.RESET}")
    print(f"{Colors.GREEN}{Colors.BOLD}  WorkforceManager is running!{Colors.RESET}")
    print(f"{Colors.BOLD}{'=' * 58}{Colors.RESET}")
    print(f"  {Colors.CYAN}API:{Colors.RESET}      http://{host}:{backend_port}")
    print(f"  {Colors.CYAN}Docs:{Colors.RESET}     http://{host}:{backend_port}/docs")
    print(f"{Colors.BOLD}{'=' * 58}{Colors.RESET}")
    print(f"\n{Colors.DIM}Press Ctrl+C to stop...{Colors.RESET}\n")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="WorkforceManager - Start the backend API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py --backend              # Start backend API
  python run.py --migrate              # Apply migrations only
  python run.py --migrate --backend    # Apply migrations, then start API
  python run.py --backend --port 9000  # Start backend on custom port
        """
    )

    parser.add_argument("--backend", action="store_true", help="Start backend API server")
    parser.add_argument("--migrate", action="store_true", help="Apply alembic migrations")
    parser.add_argument("--port", type=int, default=8000, help="Backend port (default: 8000)")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Backend host (default: 127.0.0.1)")
    parser.add_argument("--no-reload", action="store_true", help="Disable hot-reload for backend")
    parser.add_argument("--health-check", action="store_true", help="Wait for health check after start")
    parser.add_argument("--health-timeout", type=int, default=30, help="Health check timeout in seconds")

    args = parser.parse_args()

    if not (args.backend or args.migrate):
        parser.print_help()
        return

    if args.migrate and run_migrations() != 0:
        sys.exit(1)

    if not args.backend:
        return

    backend_port = args.port
    if not is_port_available(args.host, backend_port):
        log_warn(f"Port {backend_port} is already in use, finding available port...")
        backend_port = find_available_port(args.host, backend_port)
        log_info(f"Using port {backend_port} for backend")

    process = start_backend(port=backend_port, host=args.host, reload=not args.no_reload)
    try:
        if args.health_check:
            log_info("Waiting for backend to be healthy...")
            start_time = time.time()

            async def run_health_checks() -> bool:
                while time.time() - start_time < args.health_timeout:
                    if await check_backend_health(args.host, backend_port):
                        return True
                    await asyncio.sleep(0.5)
                return False

            if asyncio.run(run_health_checks()):
                log_success(f"Backend is healthy at http://{args.host}:{backend_port}")
            else:
                log_warn(f"Backend health check timeout after {args.health_timeout}s")

        print_status(args.host, backend_port)
        process.wait()

    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Shutting down...{Colors.RESET}")
        process.terminate()
        shutdown_start = time.time()
        try:
            process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            log_warn(f"Process {process.pid} did not terminate gracefully, forcing...")
            process.kill()
        log_success(f"Shutdown complete in {time.time() - shutdown_start:.1f}s")


if __name__ == "__main__":
    main()
