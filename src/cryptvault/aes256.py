"""
AES-256 block cipher (FIPS-197), implemented without a crypto library.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]

Every transform returns a fresh state; inputs are never mutated.
"""

from __future__ import annotations

from .bytemath import gmul, xtime

BLOCK_SIZE = 16
KEY_SIZE = 32
NK = 8   # key length in 32-bit words
NR = 14  # rounds
SCHEDULE_SIZE = BLOCK_SIZE * (NR + 1)  # 240 bytes

# AES S-box lookup table
SBOX = bytes([
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
])

# Inverse S-box lookup table
INV_SBOX = bytes([
    0x52, 0x09, 0x6a, 0xd5, 0x30, 0x36, 0xa5, 0x38, 0xbf, 0x40, 0xa3, 0x9e, 0x81, 0xf3, 0xd7, 0xfb,
    0x7c, 0xe3, 0x39, 0x82, 0x9b, 0x2f, 0xff, 0x87, 0x34, 0x8e, 0x43, 0x44, 0xc4, 0xde, 0xe9, 0xcb,
    0x54, 0x7b, 0x94, 0x32, 0xa6, 0xc2, 0x23, 0x3d, 0xee, 0x4c, 0x95, 0x0b, 0x42, 0xfa, 0xc3, 0x4e,
    0x08, 0x2e, 0xa1, 0x66, 0x28, 0xd9, 0x24, 0xb2, 0x76, 0x5b, 0xa2, 0x49, 0x6d, 0x8b, 0xd1, 0x25,
    0x72, 0xf8, 0xf6, 0x64, 0x86, 0x68, 0x98, 0x16, 0xd4, 0xa4, 0x5c, 0xcc, 0x5d, 0x65, 0xb6, 0x92,
    0x6c, 0x70, 0x48, 0x50, 0xfd, 0xed, 0xb9, 0xda, 0x5e, 0x15, 0x46, 0x57, 0xa7, 0x8d, 0x9d, 0x84,
    0x90, 0xd8, 0xab, 0x00, 0x8c, 0xbc, 0xd3, 0x0a, 0xf7, 0xe4, 0x58, 0x05, 0xb8, 0xb3, 0x45, 0x06,
    0xd0, 0x2c, 0x1e, 0x8f, 0xca, 0x3f, 0x0f, 0x02, 0xc1, 0xaf, 0xbd, 0x03, 0x01, 0x13, 0x8a, 0x6b,
    0x3a, 0x91, 0x11, 0x41, 0x4f, 0x67, 0xdc, 0xea, 0x97, 0xf2, 0xcf, 0xce, 0xf0, 0xb4, 0xe6, 0x73,
    0x96, 0xac, 0x74, 0x22, 0xe7, 0xad, 0x35, 0x85, 0xe2, 0xf9, 0x37, 0xe8, 0x1c, 0x75, 0xdf, 0x6e,
    0x47, 0xf1, 0x1a, 0x71, 0x1d, 0x29, 0xc5, 0x89, 0x6f, 0xb7, 0x62, 0x0e, 0xaa, 0x18, 0xbe, 0x1b,
    0xfc, 0x56, 0x3e, 0x4b, 0xc6, 0xd2, 0x79, 0x20, 0x9a, 0xdb, 0xc0, 0xfe, 0x78, 0xcd, 0x5a, 0xf4,
    0x1f, 0xdd, 0xa8, 0x33, 0x88, 0x07, 0xc7, 0x31, 0xb1, 0x12, 0x10, 0x59, 0x27, 0x80, 0xec, 0x5f,
    0x60, 0x51, 0x7f, 0xa9, 0x19, 0xb5, 0x4a, 0x0d, 0x2d, 0xe5, 0x7a, 0x9f, 0x93, 0xc9, 0x9c, 0xef,
    0xa0, 0xe0, 0x3b, 0x4d, 0xae, 0x2a, 0xf5, 0xb0, 0xc8, 0xeb, 0xbb, 0x3c, 0x83, 0x53, 0x99, 0x61,
    0x17, 0x2b, 0x04, 0x7e, 0xba, 0x77, 0xd6, 0x26, 0xe1, 0x69, 0x14, 0x63, 0x55, 0x21, 0x0c, 0x7d,
])

# Round constants, indexed by i // NK (index 0 unused)
RCON = (0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1b, 0x36)


State = list[list[int]]


def bytes_to_state(data: bytes) -> State:
    """Convert 16 bytes to 4x4 AES state (column-major)."""
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"Block must be 16 bytes, got {len(data)}")
    return [[data[col * 4 + row] for col in range(4)] for row in range(4)]


def state_to_bytes(state: State) -> bytes:
    """Convert 4x4 AES state to 16 bytes (column-major)."""
    return bytes(state[row][col] for col in range(4) for row in range(4))


# ------------------------------------------------------------------
# Key schedule
# ------------------------------------------------------------------

def expand_key(key: bytes) -> bytes:
    """Expand a 256-bit key into 15 round keys.

    For word index i >= 8:
      i % 8 == 0: RotWord, SubWord, XOR Rcon[i // 8]
      i % 8 == 4: SubWord only (AES-256 specific)
      w[i] = w[i - 8] ^ temp

    Args:
        key: 32-byte AES-256 key

    Returns:
        240-byte schedule; round key r is schedule[16 * r:16 * (r + 1)]

    Raises:
        ValueError: If key is not 32 bytes
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be 32 bytes, got {len(key)}")

    w = [list(key[i:i + 4]) for i in range(0, KEY_SIZE, 4)]

    for i in range(NK, 4 * (NR + 1)):
        temp = w[i - 1][:]
        if i % NK == 0:
            temp = [SBOX[temp[1]], SBOX[temp[2]], SBOX[temp[3]], SBOX[temp[0]]]
            temp[0] ^= RCON[i // NK]
        elif i % NK == 4:
            temp = [SBOX[b] for b in temp]
        w.append([w[i - NK][j] ^ temp[j] for j in range(4)])

    return bytes(b for word in w for b in word)


def _round_key(schedule: bytes, round_num: int) -> bytes:
    return schedule[round_num * BLOCK_SIZE:(round_num + 1) * BLOCK_SIZE]


# ------------------------------------------------------------------
# Round transforms
# ------------------------------------------------------------------

def add_round_key(state: State, round_key: bytes) -> State:
    """XOR state with a 16-byte round key (column-major)."""
    return [
        [state[row][col] ^ round_key[col * 4 + row] for col in range(4)]
        for row in range(4)
    ]


def sub_bytes(state: State) -> State:
    """Apply S-box to each byte."""
    return [[SBOX[b] for b in row] for row in state]


def inv_sub_bytes(state: State) -> State:
    """Apply inverse S-box to each byte."""
    return [[INV_SBOX[b] for b in row] for row in state]


def shift_rows(state: State) -> State:
    """Rotate row r left by r positions."""
    return [state[row][row:] + state[row][:row] for row in range(4)]


def inv_shift_rows(state: State) -> State:
    """Rotate row r right by r positions."""
    return [state[row][4 - row:] + state[row][:4 - row] for row in range(4)]


def _mix_single_column(a: list[int]) -> list[int]:
    c = [xtime(x) for x in a]
    return [
        c[0] ^ a[1] ^ c[1] ^ a[2] ^ a[3],
        a[0] ^ c[1] ^ a[2] ^ c[2] ^ a[3],
        a[0] ^ a[1] ^ c[2] ^ a[3] ^ c[3],
        c[0] ^ a[0] ^ a[1] ^ a[2] ^ c[3],
    ]


def _inv_mix_single_column(a: list[int]) -> list[int]:
    return [
        gmul(a[0], 14) ^ gmul(a[1], 11) ^ gmul(a[2], 13) ^ gmul(a[3], 9),
        gmul(a[0], 9) ^ gmul(a[1], 14) ^ gmul(a[2], 11) ^ gmul(a[3], 13),
        gmul(a[0], 13) ^ gmul(a[1], 9) ^ gmul(a[2], 14) ^ gmul(a[3], 11),
        gmul(a[0], 11) ^ gmul(a[1], 13) ^ gmul(a[2], 9) ^ gmul(a[3], 14),
    ]


def _map_columns(state: State, fn) -> State:
    columns = [fn([state[row][col] for row in range(4)]) for col in range(4)]
    return [[columns[col][row] for col in range(4)] for row in range(4)]


def mix_columns(state: State) -> State:
    """Multiply each column by the fixed [2 3 1 1] circulant matrix."""
    return _map_columns(state, _mix_single_column)


def inv_mix_columns(state: State) -> State:
    """Multiply each column by the inverse [14 11 13 9] circulant matrix."""
    return _map_columns(state, _inv_mix_single_column)


# ------------------------------------------------------------------
# Block operations
# ------------------------------------------------------------------

def _check_schedule(schedule: bytes) -> None:
    if len(schedule) != SCHEDULE_SIZE:
        raise ValueError(f"Schedule must be {SCHEDULE_SIZE} bytes, got {len(schedule)}")


def encrypt_block(block: bytes, schedule: bytes) -> bytes:
    """Encrypt a single 16-byte block.

    Args:
        block: 16-byte plaintext block
        schedule: 240-byte schedule from expand_key()

    Returns:
        16-byte ciphertext block
    """
    _check_schedule(schedule)
    state = bytes_to_state(block)

    state = add_round_key(state, _round_key(schedule, 0))

    for round_num in range(1, NR):
        state = sub_bytes(state)
        state = shift_rows(state)
        state = mix_columns(state)
        state = add_round_key(state, _round_key(schedule, round_num))

    # Final round (no MixColumns)
    state = sub_bytes(state)
    state = shift_rows(state)
    state = add_round_key(state, _round_key(schedule, NR))

    return state_to_bytes(state)


def decrypt_block(block: bytes, schedule: bytes) -> bytes:
    """Decrypt a single 16-byte block.

    Args:
        block: 16-byte ciphertext block
        schedule: 240-byte schedule from expand_key()

    Returns:
        16-byte plaintext block
    """
    _check_schedule(schedule)
    state = bytes_to_state(block)

    state = add_round_key(state, _round_key(schedule, NR))

    for round_num in range(NR - 1, 0, -1):
        state = inv_shift_rows(state)
        state = inv_sub_bytes(state)
        state = add_round_key(state, _round_key(schedule, round_num))
        state = inv_mix_columns(state)

    state = inv_shift_rows(state)
    state = inv_sub_bytes(state)
    state = add_round_key(state, _round_key(schedule, 0))

    return state_to_bytes(state)
