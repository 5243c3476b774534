"""
Data Verification Script

Offline integrity report over the torc data directory:
order files per session, corrupt records, duplicate order ids, and the
popularity record compared with the orders actually on disk.
Run from project root: python scripts/verify.py [--data-dir DIR]

The popularity record is global and outlives sessions, so its counts may
legitimately exceed what is on disk (e.g. after old sessions were moved
away); counts lower than the orders on disk indicate lost increments.

Version: 1.0.0
"""

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd

from torc.core.config import get_settings
from torc.services.session_store import SessionStore, is_order_filename


def collect_orders(sessions_root: Path) -> tuple[pd.DataFrame, list[Path]]:
    """Read every order file into one frame; return corrupt files separately."""
    rows = []
    corrupt = []
    store = SessionStore(sessions_root)

    for session in store.list_all():
        for entry in sorted((sessions_root / session).iterdir()):
            if not is_order_filename(entry.name):
                continue
            try:
                record = json.loads(entry.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                corrupt.append(entry)
                continue
            if not isinstance(record, dict):
                corrupt.append(entry)
                continue
            record["session"] = session
            rows.append(record)

    columns = ["session", "orderId", "drink", "customerName", "instructions", "timestamp"]
    return pd.DataFrame(rows, columns=columns), corrupt


def verify(data_dir: Path, sessions_dirname: str, popular_filename: str) -> bool:
    """Print the integrity report; return False if an inconsistency is found."""
    sessions_root = data_dir / sessions_dirname
    popular_path = data_dir / popular_filename
    ok = True

    print("=" * 60)
    print("DATA VERIFICATION REPORT")
    print("=" * 60)
    print(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Sessions: {sessions_root}")
    print(f"Popularity: {popular_path}")
    print("=" * 60)

    if not sessions_root.is_dir():
        print("\nNo sessions directory found - nothing to verify.")
        return True

    df, corrupt = collect_orders(sessions_root)

    print("\nSTATISTICS:")
    print(f"   Total Orders: {len(df)}")
    if len(df) > 0:
        per_session = df.groupby("session").size()
        for session, count in per_session.items():
            print(f"   {session}: {count}")

    if corrupt:
        print(f"\n{len(corrupt)} corrupt order file(s) (skipped by the service):")
        for path in corrupt[:10]:
            print(f"   {path}")
    else:
        print("\nNo corrupt order files")

    duplicates = df.duplicated(subset=["session", "orderId"]).sum()
    if duplicates > 0:
        print(f"\n{duplicates} duplicate order IDs found!")
        ok = False
    else:
        print("No duplicate order IDs")

    print("\nPOPULARITY:")
    if not popular_path.exists():
        print("   No popularity record yet")
        return ok
    try:
        counts = json.loads(popular_path.read_text(encoding="utf-8")).get("counts", {})
    except (OSError, ValueError, AttributeError) as e:
        print(f"   Popularity record unreadable: {e}")
        return False

    on_disk = df.groupby("drink").size() if len(df) > 0 else pd.Series(dtype=int)
    report = pd.DataFrame({
        "recorded": pd.Series(counts, dtype=int),
        "on_disk": on_disk,
    }).fillna(0).astype(int)
    report["missing"] = (report["on_disk"] - report["recorded"]).clip(lower=0)
    print(report.sort_values(["recorded", "on_disk"], ascending=False).to_string())

    lost = int(report["missing"].sum())
    if lost:
        print(f"\n{lost} order(s) not reflected in popularity counts")
        ok = False

    print("\n" + "=" * 60)
    print("VERIFICATION COMPLETE" if ok else "VERIFICATION FOUND PROBLEMS")
    print("=" * 60)
    return ok


if __name__ == "__main__":
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Verify torc data directory")
    parser.add_argument("--data-dir", default=settings.data_directory)
    args = parser.parse_args()

    passed = verify(Path(args.data_dir), settings.sessions_dirname, settings.popular_filename)
    sys.exit(0 if passed else 1)
