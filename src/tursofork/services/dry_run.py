"""Narration of planned operations for dry-run mode."""

from typing import List

from tursofork.models import ForkConfig


class DryRunReporter:
    """Describes what a fork invocation would do without contacting the API."""

    def describe(self, config: ForkConfig) -> List[str]:
        source = config.existing_database_name
        target = config.new_database_name

        lines = [
            "🔍 DRY RUN MODE - No actual API calls will be made",
            "",
            "Planned operations:",
            f"  Organization: {config.organization_name}",
            f"  Source database: {source}",
            f"  Target database: {target}",
        ]
        if config.group_name:
            lines.append(f"  Group: {config.group_name}")
        else:
            lines.append(f"  Group: (would be fetched from {source})")
        if config.replace:
            lines.append(f"  Replace: Would check if '{target}' exists and delete if found")
        lines.append(f"  Create database: Would create '{target}' seeded from '{source}'")
        if config.create_database_token:
            lines.append(f"  Create token: Would create authentication token for '{target}'")
        lines.extend(
            [
                "",
                "✓ Dry-run completed - all inputs validated",
                "⚠️  No outputs will be set in dry-run mode",
            ]
        )
        return lines
