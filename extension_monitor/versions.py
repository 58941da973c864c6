"""
Version helpers — comparing store versions against the submitted one.

Versions are plain dot-separated numbers ("6.12.0"). No pre-release tags,
no build metadata. Parsing is lenient on purpose: a segment that isn't a
number counts as 0 instead of raising, so one odd store listing can't take
the whole dashboard down.
"""


def parse_version(version: str) -> list[int]:
    """
    Split a version string into integer segments.

    e.g., "3.14.0" -> [3, 14, 0]
          "3.x"    -> [3, 0]
          "1_0"    -> [0]

    Only plain ASCII digits count; int() would also take "1_0", " 3" or "٣".
    """
    segments = []
    for part in str(version).split("."):
        segments.append(int(part) if part.isascii() and part.isdigit() else 0)
    return segments


def compare_versions(version_a: str, version_b: str) -> int:
    """
    Compare two versions segment by segment.

    Returns a negative number if a < b, zero if equal, positive if a > b.
    The shorter version is padded with zeros, so "1.2" == "1.2.0".
    """
    parts_a = parse_version(version_a)
    parts_b = parse_version(version_b)

    for i in range(max(len(parts_a), len(parts_b))):
        part_a = parts_a[i] if i < len(parts_a) else 0
        part_b = parts_b[i] if i < len(parts_b) else 0
        if part_a != part_b:
            return part_a - part_b
    return 0


def is_sequential_update(current_version: str, target_version: str) -> bool:
    """
    Is target exactly one release step after current?

    A step bumps one segment and resets everything after it:
        1.2.3 -> 1.2.4, 1.3.0 or 2.0.0

    Skipped releases (1.2.3 -> 1.2.5) and shape changes (1.2 -> 1.2.1)
    are not steps. The candidate must match target's string exactly.
    """
    current_parts = parse_version(current_version)

    for i in range(len(current_parts)):
        candidate = current_parts[:i] + [current_parts[i] + 1] + [0] * (len(current_parts) - i - 1)
        if ".".join(str(part) for part in candidate) == target_version:
            return True
    return False
