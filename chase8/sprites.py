"""
Sprite Bitmaps
===============
Fixed 8-pixel-wide sprite rows. Bit 7 is the leftmost pixel.
"""

SPRITE_ROWS = 6

# Player, legs apart (drawn while frame_flag == 0x00)
PLAYER_FRAME_A = (
    0b00011000,
    0b00111100,
    0b01011010,
    0b00011000,
    0b00100100,
    0b01000010,
)

# Player, arms raised and legs together (drawn while frame_flag == 0x0F)
PLAYER_FRAME_B = (
    0b00011000,
    0b10111101,
    0b01011010,
    0b00011000,
    0b00100100,
    0b00100100,
)

TARGET = (
    0b00011000,
    0b00111100,
    0b01111110,
    0b01111110,
    0b00111100,
    0b00011000,
)
