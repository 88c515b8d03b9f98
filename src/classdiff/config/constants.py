"""Configuration constants.

Values here are not user-configurable. For configurable values see models.py.
"""

DEFAULT_MAVEN_REPOSITORY_URL = "https://repo1.maven.org/maven2"
"""Maven Central."""

DEFAULT_TIMEOUT_SEC = 30.0
"""Per-request HTTP ceiling."""

GIT_CACHE_DIRNAME = "dep_class_diff"
"""Directory under the system temp dir holding bare mirrors."""

METADATA_FILENAME = "maven-metadata.xml"

GITHUB_URL = "https://github.com"
