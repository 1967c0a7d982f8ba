#!/usr/bin/env python3
# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""
Health Check Script for the Support Tools website

Usage:
    python healthcheck.py                         # Check localhost:9090
    python healthcheck.py http://example.com:9090 # Check custom URL
"""

import sys
import requests
from datetime import datetime

def run_healthcheck(base_url="http://127.0.0.1:9090"):
    """Probe /healthz and /version on the metrics port. Returns a process exit code."""

    print(f"🏥 Running website Health Check")
    print(f"📍 Target: {base_url}")
    print(f"⏰ Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    try:
        health_url = f"{base_url}/healthz"
        print(f"📡 Requesting: {health_url}")
        response = requests.get(health_url, timeout=10)

        if response.status_code != 200 or response.text.strip() != "ok":
            print(f"❌ Liveness: HTTP {response.status_code} {response.text[:100]!r}")
            return 2
        print("✅ Liveness: ok")

        version_url = f"{base_url}/version"
        print(f"📡 Requesting: {version_url}")
        response = requests.get(version_url, timeout=10)
        response.raise_for_status()
        try:
            info = response.json()
        except ValueError:
            print("❌ Invalid JSON response:")
            print(response.text[:500])
            return 3

        print(f"🔢 Version: {info.get('version', 'unknown')}")
        print(f"🌿 Git Commit: {info.get('gitCommit', 'unknown')}")
        print(f"🛠️  Build Time: {info.get('buildTime', 'unknown')}")
        print("=" * 60)
        print("🎉 All systems operational!")
        return 0

    except requests.exceptions.ConnectionError:
        print(f"❌ Connection Error: Unable to connect to {base_url}")
        print("   Make sure the website server is running")
        return 4

    except requests.exceptions.Timeout:
        print(f"❌ Timeout Error: Request to {base_url} timed out")
        return 5

    except requests.exceptions.RequestException as e:
        print(f"❌ Request Error: {e}")
        return 6

def main():
    """Main entry point"""

    if len(sys.argv) > 1:
        base_url = sys.argv[1].rstrip("/")

        # Add http:// if no protocol specified
        if not base_url.startswith(('http://', 'https://')):
            base_url = f"http://{base_url}"
    else:
        base_url = "http://127.0.0.1:9090"

    sys.exit(run_healthcheck(base_url))

if __name__ == "__main__":
    main()
