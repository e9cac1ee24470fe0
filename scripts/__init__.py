# ============================================================================
# SCRIPTS MODULE
# ============================================================================
# STATUS: Tooling - Command line entry points
# PURPOSE: pgddlx-dump console script
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
