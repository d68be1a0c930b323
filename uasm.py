import os
import sys

from uasmerrors import AssembleError, InvalidRegister
from uasmhex import format_image, resolve_layout, split_word
from uasmnodes import build_program, is_reg
from uasmtables import OPCODES, get_register
from uasmtables import MOV, WR, RD, ADD, SUB, CMP, JMP, JE, JNE, HLT, EXE

verbose = False

instr_table = {}

# Every control word is PPPP LLLLL DDDDD FF:
#   PPPP  operation prefix
#   LLLLL bus code of whatever latches the bus (load)
#   DDDDD bus code of whatever drives the bus
#   FF    flags; 01 with an empty drive field means "the next word is a literal"
NO_BUS = '00000'
REG_FLAGS = '00'
LITERAL_FLAGS = '01'

MAR = '00111'
ALU_A = '00100'

PREFIX_LOAD = '0000'
PREFIX_MEMORY = '1000'

HALT_WORD = '0000000001111100'

def table(opcode):
    def decorator(func):
        instr_table[opcode] = func
        return func
    return decorator

def literal(value):
    return format(value, '016b')

def load_code(operand):
    reg = get_register(operand.name)
    if reg.from_bus is None:
        raise InvalidRegister("%s: register can't be loaded from the bus" % operand.name,
                              token=operand.name)
    return reg.from_bus

def drive_code(operand):
    return get_register(operand.name).to_bus

def drive(prefix, load, operand):
    ''' One bus transfer with `operand` as the source. A register fits in
        a single word; an immediate needs a fetch-literal word followed by
        the literal itself. '''
    if is_reg(operand):
        return [ prefix + load + drive_code(operand) + REG_FLAGS ]
    return [ prefix + load + NO_BUS + LITERAL_FLAGS, literal(operand.value) ]

@table(MOV)
def i_mov(dest, src):
    return drive(PREFIX_LOAD, load_code(dest), src)

@table(WR)
def i_wr(address, reg):
    return drive(PREFIX_LOAD, MAR, address) + [
        PREFIX_MEMORY + '00010' + drive_code(reg) + '11'
    ]

@table(RD)
def i_rd(address, reg):
    # Mirror of WR: memory drives the bus, the register latches it
    return drive(PREFIX_LOAD, MAR, address) + [
        PREFIX_MEMORY + load_code(reg) + NO_BUS + '01'
    ]

@table(EXE)
def i_exe(address):
    return drive(PREFIX_LOAD, MAR, address) + [
        PREFIX_MEMORY + NO_BUS + NO_BUS + '10'
    ]

@table(HLT)
def i_hlt(*ignored):
    return [ HALT_WORD ]

def gen_alu(prefix, swap):
    ''' Generate a two operand ALU instruction. One operand is latched
        into the ALU's A input, the other is driven along with the
        operation word `prefix`.

        With `swap` the second operand goes into A, so that
        SUB x, y and CMP x, y work on x against y. '''

    def inner(first, second):
        if swap:
            first, second = second, first
        return drive(PREFIX_LOAD, ALU_A, first) + drive(prefix, NO_BUS, second)

    return inner

instr_table[ADD] = gen_alu('0001', False)
instr_table[SUB] = gen_alu('0010', True)
instr_table[CMP] = gen_alu('0011', True)

def gen_jump(code):
    def inner(target):
        return drive(PREFIX_LOAD, code, target)
    return inner

instr_table[JMP] = gen_jump('00110')
instr_table[JE]  = gen_jump('11111')
instr_table[JNE] = gen_jump('11110')

if set(instr_table) != OPCODES:
    raise AssertionError("opcodes without an encoder: %s"
                         % ', '.join(sorted(OPCODES - set(instr_table))))

def describe(node):
    args = [ op.name if is_reg(op) else op.text for op in node.operands ]
    return ('%s %s' % (node.mnemonic, ', '.join(args))).strip()

def encode_node(node):
    try:
        return instr_table[node.opcode](*node.operands)
    except AssembleError as e:
        raise e.locate(node.lineno, node.mnemonic)

def generate(program):
    ''' Encode the whole program, in order, into a list of 16 bit
        binary strings. '''
    words = []
    for node in program:
        code = encode_node(node)
        if verbose:
            print("%4s  %-20s %s" % (node.lineno, describe(node),
                                     ' '.join(''.join(split_word(w)) for w in code)))
        words += code
    return words

def assemble(lines, layout=None):
    ''' Source lines in, {stream name: text} out. Raises AssembleError
        on the first problem; nothing is produced in that case. '''
    program = build_program(lines)
    return format_image(generate(program), layout)

def read_source(filename):
    ''' Read a source file into (lineno, line) pairs, leaving out
        blank lines but keeping the original numbering. '''
    with open(filename, encoding='utf-8') as infile:
        source_lines = infile.read().splitlines()
    return [ (i, line.strip()) for i, line in enumerate(source_lines, 1) if line.strip() ]

def write_image(image, outdir='.'):
    written = []
    for name, text in image.items():
        outfilename = os.path.join(outdir, name + '.hex')
        with open(outfilename, 'w') as outfile:
            outfile.write(text)
        written.append(outfilename)
    return written

COLOURS = { 'r': 31, 'g': 32, 'y': 33, 'b': 34 }

def coloured(text, colour):
    if not sys.stdout.isatty() or colour not in COLOURS:
        return text
    return "\033[%dm%s\033[0m" % (COLOURS[colour], text)

def report_error(filename, source, e):
    if e.lineno is None:
        print(coloured("Error in %s: %s" % (filename, e), 'r'))
        return
    print(coloured("Error at %s line %d: %s" % (filename, e.lineno, e), 'r'))
    print("    > ", dict(source).get(e.lineno, ''))

def usage(prog):
    print("usage: %s <input-file> [ <output-layout> ] [ -o <output-dir> ] [ -v ]" % prog)
    print("       Output layouts: D8 (default), S8, S16")
    print("       D8 writes out.hex, S8 writes high.hex and low.hex, S16 writes out.hex.")

def main(argv=None):
    global verbose

    if argv is None:
        argv = sys.argv
    prog, args = os.path.basename(argv[0]), list(argv[1:])

    if '-h' in args or '--help' in args:
        usage(prog)
        return 0

    verbose = '-v' in args
    args = [ x for x in args if x != '-v' ]

    outdir = '.'
    if '-o' in args:
        i = args.index('-o')
        if i + 1 >= len(args):
            usage(prog)
            return 1
        outdir = args[i + 1]
        del args[i:i + 2]

    if not 1 <= len(args) <= 2:
        usage(prog)
        return 1

    filename = args[0]

    try:
        layout = resolve_layout(args[1] if len(args) > 1 else None)
    except ValueError as e:
        print(coloured(str(e), 'r'))
        print("use -h for help")
        return 1

    try:
        source = read_source(filename)
    except OSError as e:
        print(coloured("%s: %s" % (filename, e.strerror or e), 'r'))
        return 1
    except UnicodeDecodeError as e:
        print(coloured("%s: not a UTF-8 text file (%s)" % (filename, e.reason), 'r'))
        return 1

    print("Assembling...")

    try:
        image = assemble(source, layout)
    except AssembleError as e:
        report_error(filename, source, e)
        return 1

    written = write_image(image, outdir)

    print(coloured("Success! Output to %s" % ', '.join(written), 'g'))
    return 0

if __name__ == "__main__":
    sys.exit(main())
