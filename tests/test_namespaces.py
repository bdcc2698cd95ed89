"""End-to-end tests for namespace assembly and pointer tables."""

import pytest

from mojogl_resolver.errors import GenerationError
from mojogl_resolver.namespaces import ALL_GROUP, SPECIAL_NUMBERS_GROUP, build_documentation
from mojogl_resolver.processor import FamilyInput, process_spec, run_families
from mojogl_resolver.settings import GL_SETTINGS, GLX_SETTINGS, WGL_SETTINGS
from mojogl_resolver.types import (
    ApiFeatures,
    Documentation,
    EnumApi,
    GLFile,
    InputApi,
    OutputApi,
    PrimitiveType,
    RemoveEntry,
    RequireEntry,
    Specification,
    Version,
)


def _namespace(output, api):
    (namespace,) = [n for n in output.namespaces if n.api is api]
    return namespace


def _function_names(namespace, vendor=""):
    return [f.native_function.function_name for f in namespace.vendors[vendor].functions]


def _group(namespace, name):
    (group,) = [g for g in namespace.enum_groups if g.name == name]
    return group


@pytest.fixture
def gl_output(gl_specification):
    return process_spec(gl_specification, Documentation(), GL_SETTINGS)


class TestNamespaces:
    def test_gl_produces_core_and_compatibility(self, gl_output):
        assert [n.api for n in gl_output.namespaces] == [OutputApi.GL, OutputApi.GLCOMPAT]

    def test_removed_function_only_in_compatibility(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)
        compat = _namespace(gl_output, OutputApi.GLCOMPAT)

        assert _function_names(core) == ["Clear", "DrawArrays", "Widget"]
        assert _function_names(compat) == ["Begin", "Clear", "DrawArrays", "Widget"]

    def test_vendor_order(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)
        assert list(core.vendors) == ["", "ARB", "VEND"]
        assert _function_names(core, "ARB") == ["FooARB"]
        assert _function_names(core, "VEND") == ["Widget"]

    def test_shared_function_is_one_instance(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)
        compat = _namespace(gl_output, OutputApi.GLCOMPAT)

        widget = core.vendors["VEND"].functions[0].native_function
        assert core.vendors[""].functions[2].native_function is widget
        assert compat.vendors["VEND"].functions[0].native_function is widget

    def test_all_group(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)
        compat = _namespace(gl_output, OutputApi.GLCOMPAT)

        assert core.enum_groups[0].name == ALL_GROUP
        assert core.enum_groups[0].functions is None
        assert [m.name for m in core.enum_groups[0].members] == [
            "Points",
            "DepthBufferBit",
            "ColorBufferBit",
        ]
        assert [m.value for m in compat.enum_groups[0].members] == [0, 7, 0x100, 0x4000]

    def test_equal_values_sorted_by_name(self, make_enum):
        enums = (
            make_enum("GL_BIG", 5, "G"),
            make_enum("GL_ZETA", 0, "G"),
            make_enum("GL_MID", 0),
            make_enum("GL_ALPHA", 0, "G", "H"),
        )
        features = ApiFeatures(
            api=InputApi.GLES1,
            requires=(
                RequireEntry(
                    version=Version(1, 0),
                    enums=("GL_BIG", "GL_ZETA", "GL_MID", "GL_ALPHA"),
                ),
            ),
        )
        spec = Specification(commands=(), enums=enums, apis=(features,))

        (namespace,) = process_spec(spec, Documentation(), GL_SETTINGS).namespaces

        all_group = namespace.enum_groups[0]
        assert [m.name for m in all_group.members] == ["Alpha", "Mid", "Zeta", "Big"]
        assert [m.name for m in _group(namespace, "G").members] == ["Alpha", "Zeta", "Big"]
        assert [m.name for m in _group(namespace, "H").members] == ["Alpha"]

    def test_all_group_names_are_unique(self, make_enum):
        enums = (
            make_enum("GLX_VENDOR", 1, api=EnumApi.GLX, file=GLFile.GLX),
            make_enum("__GLX_VENDOR", 2, api=EnumApi.GLX, file=GLFile.GLX),
        )
        features = ApiFeatures(
            api=InputApi.GLX,
            requires=(
                RequireEntry(version=Version(1, 0), enums=("GLX_VENDOR", "__GLX_VENDOR")),
            ),
        )
        spec = Specification(commands=(), enums=enums, apis=(features,))

        (namespace,) = process_spec(spec, Documentation(), GLX_SETTINGS).namespaces

        (member,) = namespace.enum_groups[0].members
        assert (member.name, member.value) == ("Vendor", 1)

    def test_named_groups(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)

        assert [g.name for g in core.enum_groups] == [
            ALL_GROUP,
            "ClearBufferMask",
            "PrimitiveType",
        ]
        assert SPECIAL_NUMBERS_GROUP not in [g.name for g in core.enum_groups]

        clear_mask = _group(core, "ClearBufferMask")
        assert clear_mask.is_flags is True
        assert [m.name for m in clear_mask.members] == ["DepthBufferBit", "ColorBufferBit"]
        assert [(v, f.function_name) for v, f in clear_mask.functions] == [("", "Clear")]

        primitive_type = _group(core, "PrimitiveType")
        assert primitive_type.is_flags is False
        assert [m.name for m in primitive_type.members] == ["Points"]

    def test_group_users_in_compatibility(self, gl_output):
        compat = _namespace(gl_output, OutputApi.GLCOMPAT)
        primitive_type = _group(compat, "PrimitiveType")
        assert [f.function_name for _, f in primitive_type.functions] == [
            "Begin",
            "DrawArrays",
        ]

    def test_group_users_core_first(
        self, make_command, make_param, make_enum
    ):
        commands = (
            make_command("glAlpha", make_param("mode", PrimitiveType.ENUM, group="Mode")),
            make_command("glBeta", make_param("mode", PrimitiveType.ENUM, group="Mode")),
        )
        features = ApiFeatures(
            api=InputApi.GLES2,
            requires=(
                RequireEntry(extension="GL_EXT_alpha", vendor="EXT", commands=("glAlpha",)),
                RequireEntry(version=Version(2, 0), commands=("glBeta",), enums=("GL_M",)),
            ),
        )
        spec = Specification(
            commands=commands, enums=(make_enum("GL_M", 1, "Mode"),), apis=(features,)
        )

        output = process_spec(spec, Documentation(), GL_SETTINGS)

        (namespace,) = output.namespaces
        assert namespace.api is OutputApi.GLES2
        mode = _group(namespace, "Mode")
        assert [(v, f.function_name) for v, f in mode.functions] == [
            ("", "Beta"),
            ("EXT", "Alpha"),
        ]

    def test_mixed_group_becomes_flags(self, make_enum):
        enums = (make_enum("GL_A", 1, "Foo"), make_enum("GL_B", 2, "Foo", bitmask=True))
        features = ApiFeatures(
            api=InputApi.GLES1,
            requires=(RequireEntry(version=Version(1, 0), enums=("GL_A", "GL_B")),),
        )
        spec = Specification(commands=(), enums=enums, apis=(features,))

        (namespace,) = process_spec(spec, Documentation(), GL_SETTINGS).namespaces

        foo = _group(namespace, "Foo")
        assert foo.is_flags is True
        assert [m.name for m in foo.members] == ["A", "B"]
        assert foo.functions == ()

    def test_empty_group_kept_when_referenced(self, make_command, make_param, make_enum):
        commands = (
            make_command(
                "glShaderBinary",
                make_param("binaryFormat", PrimitiveType.ENUM, group="ShaderBinaryFormat"),
            ),
        )
        enums = (
            make_enum("GL_SHADER_BINARY_VIV", 0x8FC4, "ShaderBinaryFormat"),
            make_enum("GL_UNUSED", 1, "UnusedGroup"),
        )
        features = ApiFeatures(
            api=InputApi.GL,
            requires=(RequireEntry(version=Version(4, 1), commands=("glShaderBinary",)),),
        )
        spec = Specification(commands=commands, enums=enums, apis=(features,))

        output = process_spec(spec, Documentation(), GL_SETTINGS)

        core = _namespace(output, OutputApi.GL)
        assert [g.name for g in core.enum_groups] == [ALL_GROUP, "ShaderBinaryFormat"]
        assert _group(core, "ShaderBinaryFormat").members == ()

    def test_documentation_covers_every_function(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)
        documented = {f.entry_point for f in core.documentation}
        assert documented == {"glClear", "glDrawArrays", "glWidget", "glFooARB"}
        assert core.documentation[
            core.vendors[""].functions[0].native_function
        ].added_in == ("v1.0",)

    def test_documentation_requires_a_reference(self, gl_output):
        core = _namespace(gl_output, OutputApi.GL)
        with pytest.raises(GenerationError) as excinfo:
            build_documentation(OutputApi.GL, core.vendors, {}, GL_SETTINGS)
        assert excinfo.value.code == "INCONSISTENT_FUNCTION_RECORD"

    def test_duplicate_command(self, gl_specification, make_command):
        spec = Specification(
            commands=gl_specification.commands + (make_command("glClear"),),
            enums=gl_specification.enums,
            apis=gl_specification.apis,
        )
        with pytest.raises(GenerationError) as excinfo:
            process_spec(spec, Documentation(), GL_SETTINGS)
        assert excinfo.value.code == "INVALID_RECORD"
        assert "glClear" in excinfo.value.message

    def test_unknown_input_api(self, gl_specification):
        spec = Specification(
            commands=gl_specification.commands,
            enums=gl_specification.enums,
            apis=(ApiFeatures(api="vulkan", requires=()),),
        )
        with pytest.raises(GenerationError) as excinfo:
            process_spec(spec, Documentation(), GL_SETTINGS)
        assert excinfo.value.code == "UNKNOWN_INPUT_API"


class TestPointers:
    def test_sorted_union_of_all_namespaces(self, gl_output):
        (pointers,) = gl_output.pointers
        assert pointers.file is GLFile.GL
        assert [f.entry_point for f in pointers.functions] == [
            "glBegin",
            "glClear",
            "glDrawArrays",
            "glFooARB",
            "glWidget",
        ]

    def test_entries_are_the_namespace_instances(self, gl_output):
        (pointers,) = gl_output.pointers
        compat = _namespace(gl_output, OutputApi.GLCOMPAT)
        begin = compat.vendors[""].functions[0].native_function
        assert pointers.functions[0] is begin


class TestDeterminism:
    def test_two_runs_match(self, gl_specification):
        first = process_spec(gl_specification, Documentation(), GL_SETTINGS)
        second = process_spec(gl_specification, Documentation(), GL_SETTINGS)

        for a, b in zip(first.namespaces, second.namespaces):
            assert a.api is b.api
            assert list(a.vendors) == list(b.vendors)
            for vendor in a.vendors:
                assert _function_names(a, vendor) == _function_names(b, vendor)
            assert [(g.name, [m.name for m in g.members]) for g in a.enum_groups] == [
                (g.name, [m.name for m in g.members]) for g in b.enum_groups
            ]
        assert [f.entry_point for f in first.pointers[0].functions] == [
            f.entry_point for f in second.pointers[0].functions
        ]


class TestOtherFamilies:
    def test_removal_does_not_apply_outside_core_profiles(
        self, make_command, make_param, make_enum
    ):
        commands = (
            make_command("wglMakeCurrent", make_param("hdc", PrimitiveType.VOID_PTR)),
            make_command("SwapBuffers", make_param("hdc", PrimitiveType.VOID_PTR)),
        )
        enums = (
            make_enum(
                "WGL_FONT_LINES", 0, "WGLFontFormat", api=EnumApi.WGL, file=GLFile.WGL
            ),
        )
        features = ApiFeatures(
            api=InputApi.WGL,
            requires=(
                RequireEntry(
                    version=Version(1, 0),
                    commands=("wglMakeCurrent", "SwapBuffers"),
                    enums=("WGL_FONT_LINES",),
                ),
            ),
            removes=(RemoveEntry(version=Version(1, 1), commands=("wglMakeCurrent",)),),
        )
        family = FamilyInput(
            WGL_SETTINGS, Specification(commands=commands, enums=enums, apis=(features,))
        )

        (output,) = run_families([family])

        (namespace,) = output.namespaces
        assert namespace.api is OutputApi.WGL
        assert _function_names(namespace) == ["MakeCurrent", "SwapBuffers"]
        assert [m.name for m in _group(namespace, "WGLFontFormat").members] == ["FontLines"]
        assert output.pointers[0].file is GLFile.WGL

    def test_glx_ignores_configured_functions(self, make_command, make_enum):
        features = ApiFeatures(
            api=InputApi.GLX,
            requires=(
                RequireEntry(
                    version=Version(1, 3),
                    commands=("glXSwapBuffers", "glXAssociateDMPbufferSGIX"),
                    enums=("GLX_EXTENSION_NAME", "GLX_VENDOR"),
                ),
            ),
        )
        spec = Specification(
            commands=(make_command("glXSwapBuffers"),),
            enums=(make_enum("GLX_VENDOR", 1, api=EnumApi.GLX, file=GLFile.GLX),),
            apis=(features,),
        )

        output = process_spec(spec, Documentation(), GLX_SETTINGS)

        (namespace,) = output.namespaces
        assert _function_names(namespace) == ["SwapBuffers"]
        assert [m.name for m in namespace.enum_groups[0].members] == ["Vendor"]

    def test_families_are_independent(self, gl_specification):
        outputs = run_families(
            [
                FamilyInput(GL_SETTINGS, gl_specification),
                FamilyInput(GL_SETTINGS, gl_specification),
            ]
        )
        first_clear = outputs[0].pointers[0].functions[1]
        second_clear = outputs[1].pointers[0].functions[1]
        assert first_clear.entry_point == second_clear.entry_point == "glClear"
        assert first_clear is not second_clear
