#!/usr/bin/env python3
"""
superclone - Complete Sync Workflow Example

This example walks through the whole pipeline:
1. Resolve configuration from the environment
2. Discover and clone a user's repositories
3. Inspect stored records
4. Retry failed clones and pull updates

Run with: GITHUB_TOKEN=... python examples/sync_workflow.py octocat
"""

import logging
import sys

from superclone import (
    CloneStatus,
    DiscoveryScope,
    Provider,
    SuperCloneClient,
    SuperCloneError,
)
from superclone.logging import configure_logging


def main() -> None:
    """Run the sync workflow example."""
    username = sys.argv[1] if len(sys.argv) > 1 else "octocat"
    configure_logging(level=logging.INFO)

    print("=== superclone Sync Workflow Example ===\n")

    # Step 1: Configuration
    print("1. Loading configuration...")
    try:
        client = SuperCloneClient.from_env()
    except SuperCloneError as e:
        print(f"   Error: {e.message}")
        sys.exit(1)
    print(f"   Clone path: {client.config.clone_base_path}")
    print(f"   Database: {client.config.database_path}")

    with client:
        client.ensure_git_installed()

        # Step 2: Discover and clone
        print(f"\n2. Cloning repositories of {username}...")
        summary = client.sync.sync(DiscoveryScope.user(Provider.GITHUB, username))
        print(f"   Discovered: {summary.discovered} ({summary.created} new)")
        print(f"   Succeeded: {len(summary.succeeded)}, failed: {len(summary.failed)}")
        for outcome in summary.failed:
            print(f"   - {outcome.full_name}: [{outcome.error_kind}] {outcome.error}")

        # Step 3: Stored records
        print("\n3. Stored records...")
        for repo in client.store.find_by_owner(username):
            print(f"   {repo.status.value:<11} {repo.full_name} -> {repo.local_path or '-'}")

        # Step 4: Retry and pull
        print("\n4. Retrying failed clones...")
        errors = client.store.find_by_status(CloneStatus.ERROR)
        if errors:
            retry = client.sync.clone_pending()
            print(f"   Recovered: {len(retry.succeeded)} of {len(retry.outcomes)}")
        else:
            print("   Nothing to retry")

        print("\n5. Pulling updates...")
        pulled = client.sync.pull_all()
        print(f"   Pulled: {len(pulled.succeeded)}, failed: {len(pulled.failed)}")

    print("\n=== Example Complete ===")


if __name__ == "__main__":
    main()
