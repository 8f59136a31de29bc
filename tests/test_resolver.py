"""
Tests for inheritance resolution and extra-definition lookup.
"""

import pytest

from wrapgen.codegen.core.errors import ConfigCycle, UnknownClass
from wrapgen.codegen.core.resolver import ConfigResolver, ExtraDefinitionLocator
from wrapgen.codegen.core.schema import ConfigStore, PropertyKind


class TestConfigResolver:
    def test_properties_merge_down_the_chain(self, store: ConfigStore):
        ring = ConfigResolver(store).resolve("Ring")
        assert list(ring.all_properties) == ["color", "name", "radius", "innerRadius"]
        assert list(ring.properties) == ["innerRadius"]

    def test_most_derived_definition_wins(self, class_table: dict):
        class_table["Ring"]["properties"]["radius"] = {"type": "int", "default": 2}
        ring = ConfigResolver(ConfigStore.from_dict(class_table)).resolve("Ring")
        assert ring.all_properties["radius"].kind is PropertyKind.INT
        assert ring.all_properties["radius"].default == 2

    def test_shadowing_by_intermediate_ancestor(self, class_table: dict):
        class_table["Shape"]["properties"]["color"] = {"type": "string", "default": "red"}
        ring = ConfigResolver(ConfigStore.from_dict(class_table)).resolve("Ring")
        assert ring.all_properties["color"].kind is PropertyKind.STRING

    def test_root_class_has_root_superclass(self, store: ConfigStore):
        base = ConfigResolver(store).resolve("Base")
        assert base.super_class == "Widget"
        assert base.ancestors == ()

    def test_ancestors(self, store: ConfigStore):
        ring = ConfigResolver(store).resolve("Ring")
        assert ring.ancestors == ("Shape", "Base")

    def test_external_props_union(self, store: ConfigStore):
        ring = ConfigResolver(store).resolve("Ring")
        assert set(ring.props_defined_externally) == {"innerRadius", "name"}

    def test_constructor_args_inherited(self, store: ConfigStore):
        outline = ConfigResolver(store).resolve("RingOutline")
        assert outline.constructor_args == ("radius",)

    def test_constructor_args_from_defaults(self, store: ConfigStore):
        base = ConfigResolver(store).resolve("Base")
        assert base.constructor_args == ()
        assert base.dependencies == ()

    def test_model_name(self, store: ConfigStore):
        assert ConfigResolver(store).resolve("Mesh").model_name == "MeshModel"

    def test_resolution_is_stable(self, store: ConfigStore):
        resolver = ConfigResolver(store)
        assert resolver.resolve("Ring") == resolver.resolve("Ring")
        assert ConfigResolver(store).resolve("Ring") == resolver.resolve("Ring")

    def test_unknown_class(self, store: ConfigStore):
        with pytest.raises(UnknownClass):
            ConfigResolver(store).resolve("Nope")

    def test_unknown_ancestor(self, class_table: dict):
        class_table["Shape"]["superClass"] = "Missing"
        with pytest.raises(UnknownClass, match="Missing"):
            ConfigResolver(ConfigStore.from_dict(class_table)).resolve("Ring")

    def test_cycle_detected(self):
        store = ConfigStore.from_dict(
            {"A": {"superClass": "B"}, "B": {"superClass": "A"}}
        )
        with pytest.raises(ConfigCycle) as info:
            ConfigResolver(store).resolve("A")
        assert info.value.chain == ["A", "B", "A"]

    def test_self_cycle(self):
        store = ConfigStore.from_dict({"A": {"superClass": "A"}})
        with pytest.raises(ConfigCycle):
            ConfigResolver(store).resolve("A")

    def test_cycle_above_the_class(self):
        store = ConfigStore.from_dict(
            {
                "C": {"superClass": "A"},
                "A": {"superClass": "B"},
                "B": {"superClass": "A"},
            }
        )
        with pytest.raises(ConfigCycle):
            ConfigResolver(store).resolve("C")

    def test_long_chain_does_not_recurse(self):
        table = {"C0": {}}
        for i in range(1, 3000):
            table[f"C{i}"] = {"superClass": f"C{i - 1}"}
        resolved = ConfigResolver(ConfigStore.from_dict(table)).resolve("C2999")
        assert len(resolved.ancestors) == 2999


class TestExtraDefinitionLocator:
    def test_sibling_found(self, store: ConfigStore):
        assert ExtraDefinitionLocator(store).extra_definitions("Ring") == ["RingOutline"]

    def test_symmetric(self, store: ConfigStore):
        assert ExtraDefinitionLocator(store).extra_definitions("RingOutline") == ["Ring"]

    def test_no_siblings(self, store: ConfigStore):
        assert ExtraDefinitionLocator(store).extra_definitions("Shape") == []

    def test_class_without_path(self):
        store = ConfigStore.from_dict({"A": {}, "B": {}})
        assert ExtraDefinitionLocator(store).extra_definitions("A") == []
