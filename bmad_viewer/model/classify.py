"""
Artifact categorization.

Files are classified by their path relative to _bmad-output. Directory
prefixes are checked first, in priority order; loose root files fall back
to filename prefixes.
"""

from pathlib import PurePath, PurePosixPath

from bmad_viewer.lib.constants import ArtifactCategory

# Checked in order; the first matching prefix wins
PATH_PREFIXES = [
    ("planning-artifacts/research/", ArtifactCategory.RESEARCH),
    ("planning-artifacts/", ArtifactCategory.PLANNING),
    ("implementation-artifacts/", ArtifactCategory.STORY),
    ("analysis/", ArtifactCategory.ANALYSIS),
    ("excalidraw-diagrams/", ArtifactCategory.DIAGRAM),
    ("bmb-creations/", ArtifactCategory.BMB_CREATION),
]

FILENAME_PREFIXES = [
    (
        ("test-design", "test-review", "atdd-", "automation-", "traceability-",
         "gate-decision-", "nfr-"),
        ArtifactCategory.TEST_ARCH,
    ),
    (
        ("design-thinking-", "innovation-strategy-", "problem-solution-", "story-"),
        ArtifactCategory.CIS,
    ),
    (("brainstorming-",), ArtifactCategory.ANALYSIS),
]


def classify_by_filename(filename: str) -> ArtifactCategory:
    """Classify a root-level file by its name."""
    for prefixes, category in FILENAME_PREFIXES:
        if filename.startswith(prefixes):
            return category
    return ArtifactCategory.OTHER


def classify_artifact(relative_path) -> ArtifactCategory:
    """Classify a file by its path relative to the output root."""
    if isinstance(relative_path, PurePath):
        posix = relative_path.as_posix()
    else:
        posix = str(relative_path).replace("\\", "/")

    for prefix, category in PATH_PREFIXES:
        if posix.startswith(prefix):
            return category

    return classify_by_filename(PurePosixPath(posix).name)
