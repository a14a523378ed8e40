"""
Tests for the Closure externs backend.
"""

from __future__ import annotations

import pytest
from webidl_builders import (
    attribute,
    const,
    constructor,
    includes,
    interface,
    maplike,
    mixin,
    namespace,
    operation,
    setlike,
    typedef,
)

from webidl_to_closure_externs.pipeline import ExternsConfig, PipelineGenerator
from webidl_to_closure_externs.pipeline.config import DEFAULT_GENERATION_COMMENT
from webidl_to_closure_externs.pipeline.errors import ExternsError, UnimplementedGenericError, UnsupportedMemberKindError


def generate(*items, **config):
    return PipelineGenerator(list(items), ExternsConfig.from_dict(config)).generate()


def body(*items):
    """Generated lines after the provenance comment and the two external target blocks."""
    lines = generate(*items).splitlines()
    assert lines[:3] == [DEFAULT_GENERATION_COMMENT, "", ""]
    return lines[3:]


class TestDocumentLayout:
    def test_empty_input(self):
        assert generate() == f"{DEFAULT_GENERATION_COMMENT}\n\n\n"

    def test_without_generation_comment(self):
        assert generate(interface("GPU"), add_generation_comment=False) == "\n\n\n/** @constructor */\nfunction GPU() {}\n"

    def test_custom_generation_comment(self):
        assert generate(generation_comment="// externs").startswith("// externs\n")

    def test_blocks_separated_by_blank_lines(self):
        assert body(interface("A"), interface("B")) == [
            "",
            "/** @constructor */",
            "function A() {}",
            "",
            "/** @constructor */",
            "function B() {}",
        ]

    def test_namespaces_before_interfaces(self):
        lines = body(interface("GPU"), namespace("GPUMapMode", const("READ", "unsigned long")))
        assert lines.index("const GPUMapMode = {};") < lines.index("function GPU() {}")


class TestExternalTargets:
    def test_navigator_gpu_is_forced_nullable(self):
        output = generate(
            interface("GPU"),
            mixin("NavigatorGPU", attribute("gpu", "GPU", readonly=True)),
            includes("Navigator", "NavigatorGPU"),
        )
        assert "\n\n/** @type {?GPU} */\nNavigator.prototype.gpu;\n\n" in output

    def test_override_is_scoped_to_gpu(self):
        output = generate(
            interface("GPUAdapter"),
            mixin("NavigatorExtras", attribute("adapter", "GPUAdapter"), attribute("name", "DOMString")),
            includes("WorkerNavigator", "NavigatorExtras"),
        )
        assert "/** @type {!GPUAdapter} */\nWorkerNavigator.prototype.adapter;" in output
        assert "/** @type {string} */\nWorkerNavigator.prototype.name;" in output

    def test_override_does_not_apply_to_interfaces(self):
        output = generate(interface("GPU"), interface("GPUDevice", attribute("gpu", "GPU")))
        assert "/** @type {!GPU} */\nGPUDevice.prototype.gpu;" in output

    def test_only_attributes_are_supported(self):
        with pytest.raises(UnsupportedMemberKindError, match="Navigator"):
            generate(mixin("NavigatorGPU", operation("getGPU", "undefined")), includes("Navigator", "NavigatorGPU"))


class TestNamespaces:
    def test_constants(self):
        lines = body(
            typedef("GPUFlagsConstant", "unsigned long"),
            namespace("GPUBufferUsage", const("MAP_READ", "GPUFlagsConstant", "0x0001"), const("MAP_WRITE", "GPUFlagsConstant", "0x0002")),
        )
        assert lines == [
            "",
            "const GPUBufferUsage = {};",
            "/** @type {number} */",
            "GPUBufferUsage.MAP_READ;",
            "/** @type {number} */",
            "GPUBufferUsage.MAP_WRITE;",
        ]

    def test_only_constants_are_supported(self):
        with pytest.raises(UnsupportedMemberKindError, match="namespace"):
            generate(namespace("GPUBufferUsage", attribute("count", "unsigned long")))


class TestInterfaces:
    def test_mixin_members_before_own_members(self):
        lines = body(
            interface("GPUDevice", attribute("queue", "GPUQueue"), operation("destroy", "undefined")),
            interface("GPUQueue"),
            mixin("GPUObjectBase", attribute("label", "DOMString")),
            includes("GPUDevice", "GPUObjectBase"),
        )
        assert lines[:9] == [
            "",
            "/** @constructor */",
            "function GPUDevice() {}",
            "/** @type {string} */",
            "GPUDevice.prototype.label;",
            "/** @type {!GPUQueue} */",
            "GPUDevice.prototype.queue;",
            "/** @return {undefined} */",
            "GPUDevice.prototype.destroy = function() {};",
        ]

    def test_constructor_members_are_skipped(self):
        lines = body(interface("GPUBuffer", constructor(), attribute("mapState", "DOMString")))
        assert lines == [
            "",
            "/** @constructor */",
            "function GPUBuffer() {}",
            "/** @type {string} */",
            "GPUBuffer.prototype.mapState;",
        ]

    def test_partial_members_follow_own_members(self):
        lines = body(
            interface("GPUDevice", attribute("lost", "boolean")),
            interface("GPUDevice", attribute("onuncapturederror", "EventHandler"), partial=True),
        )
        assert lines[-4:] == [
            "/** @type {boolean} */",
            "GPUDevice.prototype.lost;",
            "/** @type {!Function} */",
            "GPUDevice.prototype.onuncapturederror;",
        ]

    def test_setlike_expands_to_six_declarations(self):
        lines = body(interface("GPUSupportedFeatures", setlike("DOMString")))
        assert lines == [
            "",
            "/** @constructor */",
            "function GPUSupportedFeatures() {}",
            "/** @type {number} */",
            "GPUSupportedFeatures.prototype.size;",
            "/** @return {!Iterable<string>} */",
            "GPUSupportedFeatures.prototype.entries = function() {};",
            "/** @return {!Iterable<string>} */",
            "GPUSupportedFeatures.prototype.keys = function() {};",
            "/** @return {!Iterable<string>} */",
            "GPUSupportedFeatures.prototype.values = function() {};",
            "/** @return {undefined} */",
            "GPUSupportedFeatures.prototype.forEach = function() {};",
            "/** @return {boolean} */",
            "GPUSupportedFeatures.prototype.has = function() {};",
        ]

    def test_setlike_of_interface(self):
        output = generate(interface("GPUAdapter"), interface("GPUAdapterSet", setlike("GPUAdapter")))
        assert output.count("/** @return {!Iterable<!GPUAdapter>} */") == 3

    def test_writable_setlike_is_unsupported(self):
        with pytest.raises(UnsupportedMemberKindError, match="non-readonly setlike"):
            generate(interface("GPUSupportedFeatures", setlike("DOMString", readonly=False)))

    def test_maplike_is_unsupported(self):
        with pytest.raises(UnsupportedMemberKindError, match="maplike"):
            generate(interface("GPURegistry", maplike("DOMString", "DOMString")))

    def test_setlike_needs_one_type_argument(self):
        item = setlike("DOMString")
        item["idlType"] = []
        with pytest.raises(UnimplementedGenericError):
            generate(interface("GPUSupportedFeatures", item))

    def test_unknown_type_stops_generation(self):
        with pytest.raises(ExternsError, match="GPUTextureView"):
            generate(interface("GPUTexture", operation("createView", "GPUTextureView")))
