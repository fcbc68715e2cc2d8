"""Crude frame classification for collapsed stacks.

The collapsed format carries no type information, so the category of a frame
is guessed from its label: Java frames are annotated with a `_[j]` suffix by
the usual stack collapsers, C++ and Rust frames have `::` in their path, and
everything else is assumed to be native code.
"""
from flameconv.profile_schema import Category

JAVA_SUFFIX = "_[j]"

CATEGORIES = [
    Category(name="Other", color="grey", subcategories=["Other"]),
    Category(name="Java", color="yellow", subcategories=["Other"]),
    Category(name="Native", color="blue", subcategories=["Other"]),
]
OTHER_CATEGORY_INDEX = 0
JAVA_CATEGORY_INDEX = 1
NATIVE_CATEGORY_INDEX = 2


def categorize_frame(label: str) -> int:
    if label.endswith(JAVA_SUFFIX):
        return JAVA_CATEGORY_INDEX
    if "::" not in label:
        return NATIVE_CATEGORY_INDEX
    return OTHER_CATEGORY_INDEX


def frame_location(label: str) -> str:
    """The label shown for a frame: the raw label minus the Java marker."""
    if label.endswith(JAVA_SUFFIX):
        return label[:-len(JAVA_SUFFIX)]
    return label
