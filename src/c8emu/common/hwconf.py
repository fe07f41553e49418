MEMORY_SIZE      = 0x1000
ADDR_MASK        = MEMORY_SIZE - 1
FONT_BASE        = 0x000
ROM_BASE         = 0x200
MAX_ROM_SIZE     = MEMORY_SIZE - ROM_BASE

REGISTERS        = 16
FLAG_REG         = 0xF
STACK_DEPTH      = 16
KEYS             = 16

DISPLAY_WIDTH    = 64
DISPLAY_HEIGHT   = 32
SPRITE_WIDTH     = 8

TIMER_HZ         = 60           # Delay and sound timers
DEFAULT_CPU_HZ   = 700          # Instructions per second
DEFAULT_SCALE    = 10           # Host pixels per VM pixel

GLYPH_SIZE = 5

# Hex digits 0-F, 5 rows each
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# Host key name -> keypad index
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
DEFAULT_KEYMAP = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}
