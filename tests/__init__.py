"""Test suite for beatshelf.

Test Structure:
- unit/: Unit tests for individual components, run against FakeFileSystem
  - io/: Filesystem backends and path helpers
  - caching/: Library cache and the cache-or-scan policy
  - engine/: Reconciliation of library and playlists
- integration/: CLI runs against a device tree under tmp_path
- conftest.py: Fake device fixtures and content factories
"""
