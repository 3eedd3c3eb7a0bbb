"""Tests for TreeConfig."""

import dataclasses

import pytest

from dtreelib import DT, ConfigurationError, OperatorBinding, TreeConfig


class TestTreeConfig:
    def test_defaults(self):
        config = TreeConfig()

        assert config.indexed is False
        assert config.root_id == "root"
        assert config.operator_binding is OperatorBinding.CALLER
        assert config.reorder_on_median is True
        assert config.validate() == []

    def test_indexed_tree(self):
        config = TreeConfig.indexed_tree(root_id="top")

        assert config.indexed
        assert config.root_id == "top"
        assert not config.per_edge_operators

    def test_per_edge(self):
        config = TreeConfig.per_edge(indexed=True)

        assert config.per_edge_operators
        assert config.indexed

    def test_frozen(self):
        config = TreeConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.indexed = True

    def test_empty_root_id_invalid(self):
        config = TreeConfig(indexed=True, root_id="")
        assert config.validate() == ["root_id cannot be empty"]

    def test_non_string_root_id_invalid(self):
        config = TreeConfig(indexed=True, root_id=7)
        assert "root_id must be a string" in config.validate()

    def test_root_id_ignored_when_not_indexed(self):
        assert TreeConfig(root_id="").validate() == []

    def test_bad_binding_invalid(self):
        config = TreeConfig(operator_binding="per_edge")
        assert "operator_binding must be an OperatorBinding" in config.validate()

    def test_init_rejects_invalid_config(self):
        with pytest.raises(ConfigurationError, match="root_id cannot be empty"):
            DT.init(None, TreeConfig(indexed=True, root_id=""))

    def test_tree_shares_config(self):
        config = TreeConfig.per_edge()
        root = DT.init("root", config).add("a", 1, op="==")

        assert root.config is config
        assert root.first().config is config

    def test_detached_node_uses_default(self):
        assert DT.new("x", 1).config == TreeConfig()
