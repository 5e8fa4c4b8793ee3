"""
数据模型单元测试

每个模块完成后必须运行：pytest tests/unit/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from propresolver.models import LayerKind, Profile, ResolvedView, SourceLayer


@pytest.fixture
def layers() -> list[SourceLayer]:
    return [
        SourceLayer(kind=LayerKind.DEFAULT, name="config.default.properties",
                    entries={"source": "default", "a": "1"}),
        SourceLayer(kind=LayerKind.CUSTOM, name="config.properties",
                    entries={"source": "custom in main"}),
        SourceLayer(kind=LayerKind.FILE, name="/tmp/override.properties",
                    entries={"source": "from file", "b": "2"}),
    ]


class TestResolvedView:
    """解析视图测试"""

    def test_merge_later_layer_wins(self, layers):
        """测试后面的层覆盖前面的层"""
        view = ResolvedView.merge(layers, Profile.PRODUCTION)
        assert view.values == {"source": "from file", "a": "1", "b": "2"}
        assert view.layers == ("default", "custom", "file")
        assert view.profile == Profile.PRODUCTION

    def test_merge_does_not_alias_layers(self, layers):
        view = ResolvedView.merge(layers, Profile.PRODUCTION)
        assert layers[0].entries["source"] == "default"
        assert view.values is not layers[-1].entries

    def test_empty(self):
        view = ResolvedView.merge([], Profile.TEST)
        assert len(view) == 0
        assert view.lookup("source") is None
        assert view.layers == ()

    def test_lookup_and_contains(self, layers):
        view = ResolvedView.merge(layers, Profile.PRODUCTION)
        assert view.lookup("a") == "1"
        assert "b" in view
        assert "missing" not in view

    def test_frozen(self, layers):
        """测试视图不可修改"""
        view = ResolvedView.merge(layers, Profile.PRODUCTION)
        with pytest.raises(ValidationError):
            view.profile = Profile.TEST
        with pytest.raises(TypeError):
            view.mapping()["a"] = "changed"  # type: ignore[index]

    def test_values_read_only(self, layers):
        """测试视图内容不能被原地修改"""
        view = ResolvedView.merge(layers, Profile.PRODUCTION)
        with pytest.raises(TypeError):
            view.values["a"] = "changed"  # type: ignore[index]
        assert view.lookup("a") == "1"

    def test_default_view_read_only(self):
        """测试空视图同样只读"""
        view = ResolvedView()
        assert len(view) == 0
        with pytest.raises(TypeError):
            view.values["a"] = "1"  # type: ignore[index]

    def test_copies_input_mapping(self):
        """测试构造时复制输入，外部修改不影响视图"""
        source = {"a": "1"}
        view = ResolvedView(values=source)
        source["a"] = "changed"
        assert view.lookup("a") == "1"


class TestSourceLayer:
    """配置层测试"""

    def test_kind_values(self):
        assert LayerKind("test_custom") == LayerKind.TEST_CUSTOM
        assert Profile("test") == Profile.TEST

    def test_frozen(self):
        layer = SourceLayer(kind=LayerKind.DEFAULT, name="x")
        assert layer.entries == {}
        with pytest.raises(TypeError):
            layer.entries["k"] = "v"  # type: ignore[index]
        with pytest.raises(ValidationError):
            layer.name = "y"
