from collections import namedtuple

from uasmerrors import (
    AssembleError, ArityMismatch, InvalidRegister, InvalidImmediate,
    InvalidImmediateFormat, InvalidImmediateRange, InvalidOperand
)
from uasmparse import split_line
from uasmtables import REG, IMM, REG_IMM, lookup, is_register

HEX_DIGITS = frozenset('0123456789abcdefABCDEF')

MAX_IMMEDIATE = 0xFFFF

Register = namedtuple('Register', 'name')

# `text` keeps the operand as written, for listings and error messages
Immediate = namedtuple('Immediate', 'value text')

InstructionNode = namedtuple('InstructionNode', 'opcode operands lineno mnemonic')

def is_reg(operand):
    return type(operand) == Register

def parse_register(raw):
    if not is_register(raw):
        raise InvalidRegister("%s: no such register" % (raw or "''"), token=raw)
    return Register(raw)

def parse_immediate(raw):
    ''' Immediates are written as 0x followed by one or more hex digits
        and have to fit in 16 bits. '''
    if not raw.startswith('0x'):
        raise InvalidImmediateFormat(
            "%s: immediate must be in hex format (starting with 0x)" % (raw or "''"),
            token=raw
        )
    digits = raw[2:]
    if not digits or any(d not in HEX_DIGITS for d in digits):
        raise InvalidImmediateFormat("%s: not a hex number" % raw, token=raw)
    value = int(digits, 16)
    if value > MAX_IMMEDIATE:
        raise InvalidImmediateRange(
            "%s: immediate out of range for 16 bits (max 0x%04X)" % (raw, MAX_IMMEDIATE),
            token=raw
        )
    return Immediate(value, raw)

def classify_operand(spec, raw, position):
    kind = spec.kinds[position]

    if kind == REG:
        return parse_register(raw)

    if kind == IMM:
        return parse_immediate(raw)

    if kind == REG_IMM:
        # A register name always wins over an immediate
        if is_register(raw):
            return Register(raw)
        try:
            return parse_immediate(raw)
        except InvalidImmediate as e:
            raise InvalidOperand(
                "%s: operand %d of %s must be a register or an immediate (%s)"
                    % (raw or "''", position + 1, spec.mnemonic.upper(), e.message),
                mnemonic=spec.mnemonic, token=raw
            ) from e

    raise AssertionError("unknown operand kind %r" % kind)

def build_node(line, lineno=None):
    ''' Turn one non-blank source line into an InstructionNode. '''
    mnemonic = None
    try:
        mnemonic, args = split_line(line)
        spec = lookup(mnemonic)

        # A zero-operand instruction sits alone on its line, so it always
        # arrives here with no operand text.
        if len(args) != spec.arity:
            raise ArityMismatch(
                "%s takes %d operand%s, got %d"
                    % (mnemonic.upper(), spec.arity, '' if spec.arity == 1 else 's', len(args)),
                mnemonic=mnemonic
            )

        operands = tuple(classify_operand(spec, arg, i) for i, arg in enumerate(args))
    except AssembleError as e:
        raise e.locate(lineno, mnemonic)

    return InstructionNode(spec.opcode, operands, lineno, mnemonic)

def build_program(lines, first_lineno=1):
    ''' Build the whole program, in source order. `lines` is either a
        sequence of strings, numbered from `first_lineno`, or of
        (lineno, string) pairs. Nothing is returned unless every line
        assembles. '''
    program = []
    for i, line in enumerate(lines):
        if type(line) == tuple:
            lineno, text = line
        else:
            lineno, text = first_lineno + i, line
        program.append(build_node(text, lineno))
    return tuple(program)
