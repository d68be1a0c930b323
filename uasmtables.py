from collections import namedtuple

from uasmerrors import UnknownInstruction

# Operand kinds accepted at each position of an instruction
REG = 'reg'
IMM = 'imm'
REG_IMM = 'reg|imm'

# Opcode tags. Every one of these must have an encoder in uasm.py.
MOV = 'mov'
WR  = 'wr'
RD  = 'rd'
ADD = 'add'
SUB = 'sub'
CMP = 'cmp'
JMP = 'jmp'
JE  = 'je'
JNE = 'jne'
HLT = 'hlt'
EXE = 'exe'

OPCODES = frozenset([ MOV, WR, RD, ADD, SUB, CMP, JMP, JE, JNE, HLT, EXE ])

InstructionSpec = namedtuple('InstructionSpec', 'mnemonic arity kinds opcode')

# from_bus: code that latches the bus into the register, None if the
# register can't be written from the bus.
# to_bus: code that puts the register on the bus.
RegisterSpec = namedtuple('RegisterSpec', 'name from_bus to_bus')

def _instructions(*specs):
    table = {}
    for mnemonic, kinds, opcode in specs:
        table[mnemonic] = InstructionSpec(mnemonic, len(kinds), tuple(kinds), opcode)
    return table

INSTRUCTIONS = _instructions(
    ('mov', [ REG,     REG_IMM ], MOV),
    ('wr',  [ REG_IMM, REG     ], WR),
    ('rd',  [ REG_IMM, REG     ], RD),
    ('add', [ REG_IMM, REG_IMM ], ADD),
    ('sub', [ REG_IMM, REG_IMM ], SUB),
    ('cmp', [ REG_IMM, REG_IMM ], CMP),
    ('jmp', [ REG_IMM ],          JMP),
    ('je',  [ REG_IMM ],          JE),
    ('jne', [ REG_IMM ],          JNE),
    ('exe', [ REG_IMM ],          EXE),
    ('hlt', [],                   HLT),
)

REGISTERS = {
    'a':    RegisterSpec('a',    '00001', '00001'),
    'b':    RegisterSpec('b',    '00011', '00010'),
    'c':    RegisterSpec('c',    '01000', '00111'),
    'acc':  RegisterSpec('acc',  None,    '00100'),
    'flgs': RegisterSpec('flgs', None,    '00101'),
    'lgc':  RegisterSpec('lgc',  None,    '01000'),
}

def lookup(mnemonic):
    try:
        return INSTRUCTIONS[mnemonic]
    except KeyError:
        raise UnknownInstruction("unknown instruction '%s'" % mnemonic,
                                 mnemonic=mnemonic, token=mnemonic) from None

def is_register(name):
    return name in REGISTERS

def get_register(name):
    # Callers only get here with names the classifier already accepted
    return REGISTERS[name]
