"""
Merge the output of `go mod graph` into a set of dependencies.

go mod graph prints one "parent@version child@version" edge per line on
stdout. Older toolchains also report each module they resolve on stderr,
as "go: finding <module> <version>".
"""

FINDING_PREFIX = "go: finding"


def parse_module_ref(module_ref: str) -> tuple[str, str]:
    """Parse a Go module reference into name and version.

    Args:
        module_ref: Module reference string (e.g., "github.com/user/repo@v1.0.0")

    Returns:
        Tuple of (module_name, version)
    """
    if "@" in module_ref:
        name, version = module_ref.rsplit("@", 1)
        return name, version
    return module_ref, "unknown"


def output_to_set(output: str, error_output: str) -> set[str]:
    """
    Collect the dependencies reported by go mod graph.

    Args:
        output: stdout of go mod graph.
        error_output: stderr of go mod graph.

    Returns:
        Set of "module@version" strings.
    """
    deps = set()

    # Parse dependency graph output
    for line in output.split("\n"):
        parts = line.split(" ")
        if len(parts) == 2:
            deps.add(parts[1])

    # Parse dependency resolution output
    for line in error_output.split("\n"):
        if not line.startswith(FINDING_PREFIX):
            continue
        # Skip "go: finding " (prefix plus the separating space)
        parts = line[len(FINDING_PREFIX) + 1 :].split(" ")
        # "go: finding module for package <pkg>" names a package, not a version
        if len(parts) < 2 or parts[:2] == ["module", "for"]:
            continue
        deps.add(f"{parts[0]}@{parts[1]}")

    return deps
