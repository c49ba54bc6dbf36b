import pytest

from zenlang.opcode import Op, Opcode


def test_op_values_are_consecutive_variant_indexes():
    assert sorted(op.value for op in Op) == list(range(len(Op)))
    assert all(Op(op.value) is op for op in Op)


def test_number_operand_becomes_float():
    opcode = Opcode(Op.LOADCN, 3)
    assert opcode.args == (3.0,)
    assert isinstance(opcode.args[0], float)


def test_string_list_operand_is_stored_as_tuple():
    assert Opcode(Op.CDFSE, ["a", "b"]).args == (("a", "b"),)


def test_two_operand_instruction():
    opcode = Opcode(Op.AIAFS, "arr", 2)
    assert opcode.op is Op.AIAFS
    assert opcode.args == ("arr", 2)


@pytest.mark.parametrize(
    ("op", "args"),
    [(Op.BR, ()), (Op.RET, (1,)), (Op.AIAFS, ("x",))],
)
def test_wrong_operand_count(op, args):
    with pytest.raises(TypeError):
        Opcode(op, *args)


@pytest.mark.parametrize(
    ("op", "value"),
    [(Op.VMCALL, 256), (Op.BR, -1), (Op.BST, 2**32), (Op.CAFSE, 2**64)],
)
def test_integer_out_of_range(op, value):
    with pytest.raises(ValueError):
        Opcode(op, value)


@pytest.mark.parametrize(
    ("op", "value"),
    [
        (Op.LOADCB, 1),
        (Op.LOADCS, 5),
        (Op.CDFSE, "ab"),
        (Op.CDFSE, ["a", 1]),
        (Op.BR, True),
        (Op.LOADCN, "1"),
    ],
)
def test_wrong_operand_type(op, value):
    with pytest.raises(TypeError):
        Opcode(op, value)


def test_equality_and_hash():
    assert Opcode(Op.BR, 3) == Opcode(Op.BR, 3)
    assert Opcode(Op.BR, 3) != Opcode(Op.BST, 3)
    assert len({Opcode(Op.BR, 3), Opcode(Op.BR, 3), Opcode(Op.BR, 4)}) == 2


def test_opcode_is_immutable():
    opcode = Opcode(Op.BR, 3)
    with pytest.raises(AttributeError):
        opcode.op = Op.BST
    assert opcode.op is Op.BR


def test_repr_names_the_op():
    assert repr(Opcode(Op.LOADV, "x")) == "Opcode(Op.LOADV, 'x')"