import pytest

from zenlang.module import Module, ModuleDecodeError, ModuleFunction
from zenlang.opcode import Op, Opcode

_SAMPLES = {
    "u8": 7,
    "u32": 1234,
    "u64": 70000,
    "f64": 2.5,
    "bool": True,
    "string": "héllo",
    "strings": ("a", "bc"),
}


def test_empty_module_bytes():
    assert Module().compile() == b"\x00\x00\x00\x00"


def test_single_ret_bytes():
    assert Module(opcodes=[Opcode(Op.RET)]).compile() == b"\x00\x00\x00\x01\x22"


def test_name_is_length_prefixed():
    assert Module(name="m").compile() == b"\x00\x01m\x00\x00"


def test_every_opcode_round_trips():
    module = Module(
        opcodes=[Opcode(op, *(_SAMPLES[kind] for kind in op.operands)) for op in Op]
    )
    assert Module.load(module.compile()) == module


def test_full_module_round_trips():
    module = Module(
        dependencies=["stdlib", "util"],
        name="main",
        functions=[ModuleFunction("main", 0, 0), ModuleFunction("add", 3, 2)],
        opcodes=[Opcode(Op.STOREV, "b"), Opcode(Op.LOADCNU), Opcode(Op.RET)],
    )
    assert Module.load(module.compile()) == module


@pytest.mark.parametrize("value", [250, 251, 65535, 65536, 2**32 - 1, 2**32, 2**64 - 1])
def test_u64_varint_boundaries(value):
    module = Module(opcodes=[Opcode(Op.CAFSE, value)])
    assert Module.load(module.compile()).opcodes[0].args == (value,)


@pytest.mark.parametrize("value", [0, 250, 251, 65535, 65536, 2**32 - 1])
def test_u32_varint_boundaries(value):
    module = Module(functions=[ModuleFunction("f", value, 0)])
    assert Module.load(module.compile()).functions[0].addr == value


def test_trailing_bytes_are_ignored():
    module = Module(name="x", opcodes=[Opcode(Op.POP)])
    assert Module.load(module.compile() + b"junk") == module


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x00\x00\x00\x01\x05",
        b"\x00\x00\x00\x01\x05\x02",
        b"\x00\x00\x00\x01\x63",
        b"\x00\x02\xff\xfe\x00\x00",
        b"\x00\x00\x00\x01\xfd" + b"\x01" * 8,
        b"\x00\x00\x00\x01\xfe",
    ],
)
def test_invalid_bytes_raise(data):
    with pytest.raises(ModuleDecodeError):
        Module.load(data)


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        Module.load(b"\x05")


def test_out_of_range_function_address_cannot_be_encoded():
    module = Module(functions=[ModuleFunction("f", 2**32, 0)])
    with pytest.raises(ValueError):
        module.compile()


def test_get_opcode():
    module = Module(opcodes=[Opcode(Op.ADD), Opcode(Op.RET)])
    assert module.get_opcode(1) == Opcode(Op.RET)
    with pytest.raises(IndexError):
        module.get_opcode(2)
    with pytest.raises(IndexError):
        module.get_opcode(-1)