"""Tests for namespace resolution and namespace config expansion."""

from commitional.config import preprocess_namespace_config
from commitional.engine import RulesEngine
from commitional.namespace import NamespaceResolver


def test_get_file_namespace():
    resolver = NamespaceResolver(["apps/*", "libs/shared"])

    assert resolver.get_file_namespace("apps/myapp/src/index.ts") == "myapp"
    assert resolver.get_file_namespace("libs/shared/index.ts") == "shared"
    assert resolver.get_file_namespace("README.md") is None
    assert resolver.get_file_namespace("apps/README.md") is None
    assert resolver.get_file_namespace("tools/build.py") is None


def test_first_declared_pattern_wins():
    resolver = NamespaceResolver(["libs/shared/", "libs/*"])
    assert resolver.get_file_namespace("libs/shared/index.ts") == "shared"
    assert resolver.get_file_namespace("libs/other/index.ts") == "other"
    assert resolver.patterns == ["libs/shared", "libs/*"]


def test_resolve_file_namespaces_keeps_first_seen_order():
    resolver = NamespaceResolver(["apps/*"])
    files = ["apps/b/x.ts", "README.md", "apps/a/y.ts", "apps/b/z.ts"]
    assert resolver.resolve_file_namespaces(files) == ["b", "a"]


def test_validate_single_namespace():
    resolver = NamespaceResolver(["apps/*", "libs/shared"])

    check = resolver.validate_single_namespace(["apps/a/x.ts", "libs/shared/y.ts"])
    assert not check.valid
    assert check.errors == ["Commit spans multiple namespaces: a, shared"]

    assert resolver.validate_single_namespace(["apps/a/x.ts", "apps/a/y.ts"]).valid


def test_alignment_across_wildcard_roots():
    resolver = NamespaceResolver(["apps/*", "libs/*"])
    check = resolver.validate_namespace_alignment("myapp", ["apps/myapp/a.ts", "libs/shared/b.ts"])

    assert not check.valid
    assert check.namespaces == ["myapp", "shared"]
    assert check.errors == ["Commit spans multiple namespaces: myapp, shared"]


def test_validate_namespace_alignment():
    """Test every outcome of comparing a declared namespace with files."""
    resolver = NamespaceResolver(["apps/*"])

    assert resolver.validate_namespace_alignment("myapp", ["apps/myapp/index.ts"]).valid
    assert resolver.validate_namespace_alignment("", ["README.md"]).valid

    check = resolver.validate_namespace_alignment("myapp", ["README.md"])
    assert check.errors == ['Files not apart of namespace "myapp"']

    check = resolver.validate_namespace_alignment("", ["apps/myapp/index.ts"])
    assert check.errors == ['Files in apps/myapp require namespace "myapp"']

    check = resolver.validate_namespace_alignment("other", ["README.md", "apps/myapp/src/a.ts"])
    assert check.errors == ['Files in apps/myapp/src require namespace "myapp", got "other"']


def test_get_available_namespaces_lists_literal_namespaces():
    resolver = NamespaceResolver(["apps/*", "libs/shared/", "tools/cli"])
    assert resolver.get_available_namespaces() == ["shared", "cli"]


def test_from_rules_engine_prefers_alignment_directories():
    engine = RulesEngine.from_rules({
        "namespace-enum": [2, "always", ["core"]],
        "namespace-alignment": [2, "always", ["apps/*"]],
    })
    assert NamespaceResolver.from_rules_engine(engine).patterns == ["apps/*"]

    engine = RulesEngine.from_rules({"namespace-enum": [2, "always", ["core"]]})
    assert NamespaceResolver.from_rules_engine(engine).patterns == ["core"]

    assert NamespaceResolver.from_rules_engine(RulesEngine()).patterns == []


def test_preprocess_expands_directory_patterns(tmp_path):
    (tmp_path / "apps" / "b").mkdir(parents=True)
    (tmp_path / "apps" / "a").mkdir()
    (tmp_path / "apps" / "notes.md").write_text("not a namespace")

    rules = preprocess_namespace_config(
        {"namespace-enum": [2, "always", ["apps/*", "libs/shared"]]}, tmp_path
    )

    assert rules["namespace-enum"] == [2, "always", ["a", "b", "shared"]]
    assert rules["namespace-alignment"] == [2, "always", ["apps/a/", "apps/b/", "libs/shared"]]


def test_preprocess_ignores_missing_directories(tmp_path):
    rules = {"namespace-enum": [2, "always", ["apps/"]]}
    assert preprocess_namespace_config(rules, tmp_path) == {"namespace-enum": [2, "always", ["apps/"]]}


def test_preprocess_leaves_other_rules_alone(tmp_path):
    rules = {"subject-max-length": [2, "always", 50]}
    assert preprocess_namespace_config(rules, tmp_path) == {"subject-max-length": [2, "always", 50]}


def test_expanded_rules_resolve_namespaces(tmp_path):
    (tmp_path / "apps" / "web").mkdir(parents=True)
    engine = RulesEngine.from_rules(
        preprocess_namespace_config({"namespace-enum": [2, "always", ["apps/*"]]}, tmp_path)
    )

    _, errors, _ = engine.validate("web")
    assert errors == []
    _, errors, _ = engine.validate("api")
    assert errors == ["[namespace:0] The namespace must always be one of 'web'"]
