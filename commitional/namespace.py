"""Resolve changed file paths to the namespace (app, package) they belong to."""
import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .models import RuleType

if TYPE_CHECKING:
    from .engine import RulesEngine


@dataclass
class NamespaceCheck:
    valid: bool
    namespaces: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class NamespaceResolver:
    """Map file paths onto namespaces declared by directory patterns.

    ``apps/*`` makes every immediate subdirectory of ``apps`` a namespace,
    while ``libs/shared`` (or ``libs/shared/``) is a namespace on its own,
    named after the directory. Patterns are matched in the order they were
    declared and the first match wins.
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self._patterns: List[Tuple[str, bool]] = []
        for pattern in patterns or ():
            pattern = pattern.replace("\\", "/")
            if pattern.endswith("/*"):
                self._patterns.append((pattern[:-2].rstrip("/"), True))
            else:
                self._patterns.append((pattern.rstrip("/"), False))

    @property
    def patterns(self) -> List[str]:
        return [f"{directory}/*" if wildcard else directory for directory, wildcard in self._patterns]

    def get_file_namespace(self, file_path: str) -> Optional[str]:
        """Namespace of a single file, or None for files outside every pattern."""
        path = file_path.replace("\\", "/")
        if "/" not in path:
            return None

        for directory, wildcard in self._patterns:
            if not path.startswith(f"{directory}/"):
                continue
            if not wildcard:
                return posixpath.basename(directory)
            remainder = path[len(directory) + 1:]
            if "/" not in remainder:
                # a file directly inside the wildcard directory has no namespace
                continue
            return remainder.split("/", 1)[0]
        return None

    def resolve_file_namespaces(self, files: Iterable[str]) -> List[str]:
        """Distinct namespaces touched by the files, in first-seen order."""
        namespaces: List[str] = []
        for file_path in files:
            namespace = self.get_file_namespace(file_path)
            if namespace is not None and namespace not in namespaces:
                namespaces.append(namespace)
        return namespaces

    def validate_single_namespace(self, files: Iterable[str]) -> NamespaceCheck:
        namespaces = self.resolve_file_namespaces(files)
        if len(namespaces) > 1:
            return NamespaceCheck(
                False, namespaces, [f"Commit spans multiple namespaces: {', '.join(namespaces)}"]
            )
        return NamespaceCheck(True, namespaces)

    def _folder_of(self, files: List[str], namespace: str) -> str:
        for file_path in files:
            if self.get_file_namespace(file_path) == namespace:
                return posixpath.dirname(file_path.replace("\\", "/"))
        return namespace

    def validate_namespace_alignment(self, namespace: str, files: Iterable[str]) -> NamespaceCheck:
        """Check the declared namespace against the namespace of the files."""
        files = list(files)
        namespaces = self.resolve_file_namespaces(files)

        if not namespaces:
            if namespace:
                return NamespaceCheck(False, namespaces, [f'Files not apart of namespace "{namespace}"'])
            return NamespaceCheck(True, namespaces)

        if len(namespaces) > 1:
            return self.validate_single_namespace(files)

        required = namespaces[0]
        if not namespace:
            folder = self._folder_of(files, required)
            return NamespaceCheck(False, namespaces, [f'Files in {folder} require namespace "{required}"'])
        if namespace != required:
            folder = self._folder_of(files, required)
            return NamespaceCheck(
                False, namespaces, [f'Files in {folder} require namespace "{required}", got "{namespace}"']
            )
        return NamespaceCheck(True, namespaces)

    def get_available_namespaces(self) -> List[str]:
        """Names of the literal (non-wildcard) namespaces.

        Wildcard namespaces depend on the directories present on disk and are
        expanded by the config preprocessor instead.
        """
        names: List[str] = []
        for directory, wildcard in self._patterns:
            name = posixpath.basename(directory)
            if not wildcard and name not in names:
                names.append(name)
        return names

    @classmethod
    def from_rules_engine(cls, rules_engine: "RulesEngine") -> "NamespaceResolver":
        """Build a resolver from the namespace rules of an engine.

        The directory list of ``namespace-alignment`` is preferred; without it
        the values of ``namespace-enum`` are used as literal namespaces.
        """
        engine = rules_engine.narrow("namespace")
        for rule_type in (RuleType.ALIGNMENT, RuleType.ENUM):
            rules = engine.get_rules_of_type(rule_type)
            if rules:
                return cls(rules[0].value)
        return cls()
