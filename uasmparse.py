import ply.yacc as yacc
import uasmlex

from uasmerrors import LineSyntaxError

tokens = uasmlex.tokens

start = 'line'

def p_line_simple(p):
    '''line : NAME'''
    p[0] = (p[1], [])

def p_line_params(p):
    '''line : NAME params'''
    p[0] = (p[1], p[2])

# Empty fields are kept as '' so that "mov a," or "add a,,b" reach the
# operand classifier and get rejected there.

def p_params_single(p):
    '''params : ARG'''
    p[0] = [ p[1] ]

def p_params_leading_comma(p):
    '''params : COMMA'''
    p[0] = [ '', '' ]

def p_params_leading_comma_arg(p):
    '''params : COMMA ARG'''
    p[0] = [ '', p[2] ]

def p_params_trailing_comma(p):
    '''params : params COMMA'''
    p[0] = p[1] + [ '' ]

def p_params_multiple(p):
    '''params : params COMMA ARG'''
    p[0] = p[1] + [ p[3] ]

def p_error(p):
    if not p:
        raise LineSyntaxError("unexpected end of line")
    raise LineSyntaxError("syntax error at '%s'" % p.value, token=p.value)

parser = yacc.yacc(debug=False, write_tables=False)

def split_line(line):
    ''' Split one source line into (mnemonic, [raw operand, ...]).
        The line must not be blank. '''
    uasmlex.lexer.begin('INITIAL')
    return parser.parse(line, lexer=uasmlex.lexer)
