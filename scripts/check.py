#!/usr/bin/env python3
"""
Скрипт проверки проекта http-transport.

Запускает:
- Форматирование (black)
- Линтинг (ruff)
- Проверка типов (mypy) - опционально
- Тесты (pytest), с coverage по флагу

Usage:
    python scripts/check.py
    python scripts/check.py --fast  # Без mypy
    python scripts/check.py --fix   # Автоматические исправления
    python scripts/check.py --cov   # Coverage для http_transport
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Tuple


class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    BOLD = '\033[1m'
    END = '\033[0m'


def run_command(command: List[str], description: str) -> Tuple[bool, str]:
    """
    Запустить команду и вернуть (success, output).

    Отсутствующий инструмент не считается ошибкой.
    """
    print(f"\n{Colors.BOLD}{Colors.BLUE}▶ {description}{Colors.END}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='ignore'
        )
    except FileNotFoundError:
        print(f"{Colors.YELLOW}⚠ Command not found: {command[0]} - SKIPPED{Colors.END}")
        return True, ""

    success = result.returncode == 0
    if success:
        print(f"{Colors.GREEN}✓ {description} - OK{Colors.END}")
    else:
        print(f"{Colors.RED}✗ {description} - FAILED{Colors.END}")
        print((result.stdout + result.stderr)[-2000:])

    return success, result.stdout + result.stderr


def main() -> int:
    parser = argparse.ArgumentParser(description="Проверка качества кода")
    parser.add_argument("--fast", action="store_true", help="Без mypy")
    parser.add_argument("--fix", action="store_true", help="Автоматические исправления")
    parser.add_argument("--cov", action="store_true", help="Coverage отчёт")
    parser.add_argument("--skip-tests", action="store_true", help="Только линтеры")
    args = parser.parse_args()

    root_dir = Path(__file__).parent.parent
    src_dir = str(root_dir / "src")
    tests_dir = str(root_dir / "tests")

    results = []

    black_command = ["black", src_dir, tests_dir]
    if not args.fix:
        black_command.insert(1, "--check")
    results.append(("Black", run_command(black_command, "Форматирование (black)")[0]))

    ruff_command = ["ruff", "check", src_dir, tests_dir]
    if args.fix:
        ruff_command.append("--fix")
    results.append(("Ruff", run_command(ruff_command, "Линтинг (ruff)")[0]))

    if not args.fast:
        mypy_command = ["mypy", src_dir, "--ignore-missing-imports"]
        results.append(("Mypy", run_command(mypy_command, "Проверка типов (mypy)")[0]))

    if not args.skip_tests:
        pytest_command = ["pytest", "-q", tests_dir]
        if args.cov:
            pytest_command += ["--cov=http_transport", "--cov-report=term-missing"]
        success, output = run_command(pytest_command, "Тесты (pytest)")
        results.append(("Pytest", success))
        for line in output.splitlines():
            if 'passed' in line or 'failed' in line:
                print(line)

    print(f"\n{Colors.BOLD}{'=' * 60}\n  ИТОГОВЫЙ ОТЧЁТ\n{'=' * 60}{Colors.END}\n")
    for check_name, success in results:
        status = "✓ PASSED" if success else "✗ FAILED"
        color = Colors.GREEN if success else Colors.RED
        print(f"{color}{status:12}{Colors.END} {check_name}")

    return 0 if all(success for _, success in results) else 1


if __name__ == "__main__":
    sys.exit(main())
