#!/usr/bin/env python
"""
Test runner script

Usage:
    python run_tests.py              # Run all tests
    python run_tests.py unit         # Run unit tests only (helpers, config)
    python run_tests.py service      # Run service-layer tests
    python run_tests.py api          # Run API tests only
    python run_tests.py integration  # Run integration tests
    python run_tests.py coverage     # Run all tests with coverage report
"""
import sys
import subprocess


def run_pytest(args: list[str]):
    """Run pytest with given arguments"""
    cmd = ["python", "-m", "pytest"] + args
    print(f"\n{'='*60}")
    print(f"Running: {' '.join(cmd)}")
    print(f"{'='*60}\n")
    return subprocess.run(cmd).returncode


def main():
    if len(sys.argv) < 2:
        return run_pytest(["-v", "--tb=short"])

    test_type = sys.argv[1].lower()

    if test_type == "unit":
        return run_pytest([
            "-v",
            "tests/test_utils.py",
            "tests/test_config.py",
        ])

    elif test_type == "service":
        return run_pytest([
            "-v",
            "tests/test_users.py",
            "tests/test_posts.py",
        ])

    elif test_type == "api":
        return run_pytest([
            "-v",
            "tests/test_auth.py",
            "tests/test_posts_api.py",
        ])

    elif test_type == "integration":
        return run_pytest([
            "-v",
            "tests/test_integration.py",
        ])

    elif test_type == "coverage":
        return run_pytest([
            "-v",
            "--cov=blog",
            "--cov-report=term-missing",
            "--cov-report=html",
        ])

    else:
        print(f"Unknown test type: {test_type}")
        print(__doc__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
