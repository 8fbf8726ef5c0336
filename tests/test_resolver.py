"""Tests for resolving selections into install plans."""

import logging

import pytest

from lowlevel_skills.errors import UnknownBundleError, UnknownSkillWarning
from lowlevel_skills.store.catalog import default_catalog
from lowlevel_skills.store.models import (
    AllSkills,
    BundleSelection,
    CategorySelection,
    ExplicitSelection,
)
from lowlevel_skills.store.resolver import Resolver, dedupe

INSTALL_PREFIX = "npx skills add mohitmishra786/low-level-dev-skills --skill "

RUST_COMMAND = INSTALL_PREFIX + (
    "rustc-basics cargo-workflows rust-debugging rust-profiling "
    "rust-ffi rust-cross rust-sanitizers-miri rust-unsafe"
)

# Published install command for every packaged bundle
BUNDLE_COMMANDS = {
    "c-cpp": INSTALL_PREFIX + (
        "gcc clang llvm msvc-cl cross-gcc pgo cmake make ninja meson conan-vcpkg "
        "static-analysis gdb lldb core-dumps linux-perf valgrind flamegraphs "
        "strace-ltrace heaptrack sanitizers fuzzing elf-inspection linkers-lto "
        "binutils dynamic-linking assembly-x86 assembly-arm interpreters "
        "simd-intrinsics memory-model cpu-cache-opt"
    ),
    "rust": RUST_COMMAND,
    "zig": INSTALL_PREFIX + (
        "zig-compiler zig-build-system zig-cinterop zig-debugging zig-cross"
    ),
    "core": INSTALL_PREFIX + (
        "gcc clang rustc-basics zig-compiler gdb lldb linux-perf cmake "
        "cargo-workflows zig-build-system"
    ),
    "safety": INSTALL_PREFIX + (
        "sanitizers fuzzing rust-sanitizers-miri rust-unsafe"
    ),
    "profilers": INSTALL_PREFIX + (
        "linux-perf valgrind flamegraphs strace-ltrace heaptrack rust-profiling"
    ),
}


# ── Packaged catalog scenarios ──────────────────────────────────────


class TestPackagedCatalog:
    """Resolution against the shipped catalog."""

    def test_all_is_catalog_order(self, resolver: Resolver):
        plan = resolver.resolve(AllSkills())
        expected = tuple(s.name for s in default_catalog().list_skills())
        assert plan.names == expected
        assert len(set(plan.names)) == len(plan.names)

    def test_all_command_uses_all_flag(self, resolver: Resolver):
        plan = resolver.resolve(AllSkills())
        assert plan.command == "npx skills add mohitmishra786/low-level-dev-skills --all"

    @pytest.mark.parametrize("category", default_catalog().list_categories())
    def test_category_is_exact_subset(self, resolver: Resolver, category: str):
        catalog = resolver.catalog
        plan = resolver.resolve(CategorySelection(category))
        for name in plan.names:
            assert catalog.find_skill(name).category == category
        assert plan.names == tuple(
            s.name for s in catalog.list_skills() if s.category == category
        )

    def test_debuggers_category(self, resolver: Resolver):
        plan = resolver.resolve(CategorySelection("debuggers"))
        assert plan.names == ("gdb", "lldb", "core-dumps")

    @pytest.mark.parametrize("bundle", default_catalog().list_bundles(), ids=lambda b: b.tag)
    def test_bundle_matches_definition(self, resolver: Resolver, bundle):
        plan = resolver.resolve(BundleSelection(bundle.tag))
        assert plan.names == dedupe(bundle.members)

    def test_rust_bundle_command(self, resolver: Resolver):
        assert resolver.resolve(BundleSelection("rust")).command == RUST_COMMAND

    @pytest.mark.parametrize("tag, command", sorted(BUNDLE_COMMANDS.items()))
    def test_bundle_command_is_published_string(self, resolver: Resolver, tag, command):
        assert resolver.resolve(BundleSelection(tag)).command == command

    def test_every_bundle_has_a_published_command(self, resolver: Resolver):
        tags = {b.tag for b in resolver.catalog.list_bundles()}
        assert tags == set(BUNDLE_COMMANDS)

    def test_c_cpp_bundle_keeps_authored_order(self, resolver: Resolver):
        names = resolver.resolve(BundleSelection("c-cpp")).names
        assert names[:8] == ("gcc", "clang", "llvm", "msvc-cl", "cross-gcc", "pgo", "cmake", "make")

    def test_unknown_bundle_raises(self, resolver: Resolver):
        with pytest.raises(UnknownBundleError):
            resolver.resolve(BundleSelection("does-not-exist"))

    def test_explicit_dedup_and_drop_unknown(self, resolver: Resolver):
        plan = resolver.resolve(ExplicitSelection(["gdb", "nonexistent-skill", "gdb"]))
        assert plan.names == ("gdb",)
        assert plan.warnings == (UnknownSkillWarning("nonexistent-skill"),)
        assert "nonexistent-skill" in plan.warnings[0].message

    def test_explicit_accepts_a_set(self, resolver: Resolver):
        plan = resolver.resolve(ExplicitSelection({"gdb", "nonexistent-skill"}))
        assert plan.names == ("gdb",)
        assert [w.name for w in plan.warnings] == ["nonexistent-skill"]

    def test_idempotent_commands(self, resolver: Resolver):
        for request in (
            AllSkills(),
            CategorySelection("zig"),
            BundleSelection("core"),
            ExplicitSelection(["lldb", "gcc"]),
        ):
            assert resolver.resolve(request).command == resolver.resolve(request).command


# ── Fixture catalog behavior ────────────────────────────────────────


class TestResolver:
    """Resolution rules against a small injected catalog."""

    def test_custom_source_in_command(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(CategorySelection("compilers"))
        assert plan.command == "npx skills add acme/skills --skill gcc clang"

    def test_custom_installer(self, fixture_catalog):
        resolver = Resolver(fixture_catalog, source="acme/skills", installer="skills add")
        assert resolver.resolve(AllSkills()).command == "skills add acme/skills --all"

    def test_bundle_deduplicates_members(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(BundleSelection("debug"))
        assert plan.names == ("lldb", "gdb")
        assert plan.command.endswith("--skill lldb gdb")

    def test_empty_category_is_empty_plan(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(CategorySelection("zig"))
        assert plan.is_empty
        assert plan.names == ()
        assert plan.command == ""
        assert plan.warnings == ()

    def test_explicit_uses_catalog_order(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(ExplicitSelection(["rust-ffi", "gcc", "gdb"]))
        assert plan.names == ("gcc", "gdb", "rust-ffi")

    def test_explicit_all_unknown(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(ExplicitSelection(["nope", "also-nope", "nope"]))
        assert plan.is_empty
        assert [w.name for w in plan.warnings] == ["nope", "also-nope"]

    def test_explicit_is_case_sensitive(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(ExplicitSelection(["GCC"]))
        assert plan.is_empty
        assert plan.warnings[0].name == "GCC"

    def test_explicit_from_string(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(ExplicitSelection("gdb lldb"))
        assert plan.names == ("gdb", "lldb")

    def test_resolve_names(self, fixture_resolver: Resolver):
        assert fixture_resolver.resolve_names(["lldb"]).names == ("lldb",)

    def test_unknown_skill_is_logged(self, fixture_resolver: Resolver, caplog):
        with caplog.at_level(logging.WARNING, logger="lowlevel_skills.store.resolver"):
            fixture_resolver.resolve(ExplicitSelection(["ghost"]))
        assert "ghost" in caplog.text

    def test_unsupported_request_type(self, fixture_resolver: Resolver):
        with pytest.raises(TypeError):
            fixture_resolver.resolve({"kind": "all"})

    def test_plan_to_dict(self, fixture_resolver: Resolver):
        plan = fixture_resolver.resolve(ExplicitSelection(["gdb", "ghost"]))
        assert plan.to_dict() == {
            "names": ["gdb"],
            "command": "npx skills add acme/skills --skill gdb",
            "warnings": ["Unknown skill ignored: ghost"],
        }

    def test_requests_are_hashable(self):
        assert ExplicitSelection(["a", "b"]) == ExplicitSelection(("a", "b"))
        assert len({AllSkills(), AllSkills(), CategorySelection("zig")}) == 2


class TestDedupe:
    def test_first_occurrence_wins(self):
        assert dedupe(["b", "a", "b", "c", "a"]) == ("b", "a", "c")

    def test_empty(self):
        assert dedupe([]) == ()
