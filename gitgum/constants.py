"""Shared constants for gitgum."""

# Markers `git branch` puts in front of names
BRANCH_MARKER_CURRENT = "* "
BRANCH_MARKER_WORKTREE = "+ "

# Diagnostic git prints for `<branch>@{u}` when nothing is tracked
NO_UPSTREAM_PATTERN = "no upstream configured for branch"

# `git ls-remote --exit-code` status when the remote has no matching ref
LS_REMOTE_NO_MATCH = 2

# Prefix of `git clean -n` lines
CLEAN_PREVIEW_PREFIX = "Would remove "

IGNORE_FILE_NAME = ".gitignore"

EMPTY_COMMIT_MESSAGE = "chore: empty commit"

PR_BRANCH_PREFIX = "pr-"
PR_REF_PATTERN = r"^[0-9a-f]+\s+refs/pull/(\d+)/(head|merge)$"
PR_LABEL_PATTERN = r"^PR #(\d+) \((\w+)\)$"

# Placeholder substituted in the completion templates
COMPLETION_PLACEHOLDER = "__GITGUM_CMD__"
COMPLETION_SHELLS = ("bash", "fish", "zsh")

# Section headers for `gitgum status`
HEADER_BRANCHES = "--- BRANCHES ---------------------------"
HEADER_REMOTES = "--- REMOTES ----------------------------"
HEADER_CHANGES = "--- CHANGES ----------------------------"
HEADER_STATUS = "--- STATUS -----------------------------"

# ANSI codes for section headers. The colour is black even though the helper
# that prints it has always been called "blue".
ANSI_HEADER = "\033[0;30m"
ANSI_RESET = "\033[0m"

YES = "yes"
NO = "no"
