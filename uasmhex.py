from uasmerrors import MalformedWordLength

# First line of every image; the EEPROM programming tool expects it
HEADER = 'v2.0 raw\n'

WORD_BITS = 16

DUAL_INTERLEAVED = 'dual-interleaved'
DUAL_SEPARATE = 'dual-separate'
SINGLE_WORD = 'single-word'

DEFAULT_LAYOUT = DUAL_INTERLEAVED

# Short names used on the command line:
#   D8  - one 8 bit EEPROM holding word n at addresses 2n and 2n+1
#   S8  - two 8 bit EEPROMs, one for the high byte and one for the low byte
#   S16 - one 16 bit wide EEPROM
LAYOUT_CODES = {
    'D8':  DUAL_INTERLEAVED,
    'S8':  DUAL_SEPARATE,
    'S16': SINGLE_WORD,
}

LAYOUTS = frozenset(LAYOUT_CODES.values())

def resolve_layout(name):
    if name is None:
        return DEFAULT_LAYOUT
    if name in LAYOUTS:
        return name
    try:
        return LAYOUT_CODES[name.upper()]
    except KeyError:
        raise ValueError("unknown output layout '%s'" % name) from None

def split_words(stream):
    if type(stream) == str:
        # Only the final newline is a terminator; any other empty
        # line is a bad word and split_word rejects it
        if stream.endswith('\n'):
            stream = stream[:-1]
        return stream.split('\n') if stream else []
    return list(stream)

def split_word(word):
    ''' Split a 16 bit binary string into its high and low bytes,
        each as two uppercase hex digits. '''
    if len(word) != WORD_BITS or set(word) - set('01'):
        raise MalformedWordLength("encoder produced a malformed word: %r" % word,
                                  token=word)
    return '%02X' % int(word[:8], 2), '%02X' % int(word[8:], 2)

def format_image(words, layout=DEFAULT_LAYOUT):
    ''' Lay the words out for the target memory. Returns a dict mapping
        stream name to text: 'out' for single stream layouts, 'high'
        and 'low' for dual-separate. '''
    layout = resolve_layout(layout)
    pairs = [ split_word(w) for w in split_words(words) ]

    if layout == DUAL_SEPARATE:
        return {
            'high': HEADER + ''.join('%s ' % hi for hi, _ in pairs),
            'low':  HEADER + ''.join('%s ' % lo for _, lo in pairs),
        }

    if layout == SINGLE_WORD:
        return { 'out': HEADER + ''.join('%s%s ' % p for p in pairs) }

    return { 'out': HEADER + ''.join('%s %s ' % p for p in pairs) }
