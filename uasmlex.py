import ply.lex as lex

from uasmerrors import LineSyntaxError

tokens = [ 'NAME', 'ARG', 'COMMA' ]

# Everything after the mnemonic is lexed as comma-separated operand text
states = (
    ('operands', 'exclusive'),
)

t_ignore = ' \t\r\n'

t_operands_ignore = ' \t\r\n'

t_operands_COMMA = r','

def t_NAME(t):
    r'\S+'
    t.lexer.begin('operands')
    return t

def t_operands_ARG(t):
    r'[^,\s][^,]*'
    # "0x 1F" and "0x1F" are the same operand
    t.value = ''.join(t.value.split())
    return t

def t_ANY_error(t):
    raise LineSyntaxError("unexpected character '%s'" % t.value[0],
                          token=t.value[0])

lexer = lex.lex()
