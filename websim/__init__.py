# =============================================================================
# websim/__init__.py
# =============================================================================
# This package contains everything that talks to (and reads from) the public
# WebSim REST API: the request client, the record types, the text formatting
# helpers, and one handler function per tool.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  Every module here is plain
#   Python on top of the standard library, so a handler can be called from a
#   REPL with a real client or from a test with a fake opener.
#
# LAYOUT:
#   config.py      → settings read from the environment
#   errors.py      → the failure taxonomy
#   client.py      → one HTTP request per call
#   context.py     → client + link builder handed to every handler
#   models.py      → optional-field records parsed from upstream JSON
#   formatting.py  → numbers, dates, relative times, deep links
#   render.py      → markdown blocks shared by several handlers
#   projects.py    → project, revision, comment, screenshot, asset handlers
#   users.py       → user profile, stats, project list, social graph handlers
#   feeds.py       → trending, posts and search feed handlers
#   search.py      → asset search, keywords, top searches, health check
# =============================================================================
