# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令語のデコード表と、Opcodeから実行関数へのマッピング定義。
"""
from .base import Opcode
from . import control
from . import alu
from . import load
from . import display
from . import keys

# @intent:map 上位ニブルだけで命令が確定するクラス。
DECODE_MAP = {
    0x1: Opcode.JP,
    0x2: Opcode.CALL,
    0x3: Opcode.SE_VX_NN,
    0x4: Opcode.SNE_VX_NN,
    0x6: Opcode.LD_VX_NN,
    0x7: Opcode.ADD_VX_NN,
    0xA: Opcode.LD_I,
    0xB: Opcode.JP_V0,
    0xC: Opcode.RND,
    0xD: Opcode.DRW,
}

# @intent:map 上位ニブルに加えてサブセレクタで命令が決まるクラス。 (セレクタのマスク, {セレクタ値: Opcode})
SUBSELECTOR_MAP = {
    0x0: (0x0FFF, {
        0x0E0: Opcode.CLS,
        0x0EE: Opcode.RET,
    }),
    0x5: (0x000F, {
        0x0: Opcode.SE_VX_VY,
    }),
    0x8: (0x000F, {
        0x0: Opcode.LD_VX_VY,
        0x1: Opcode.OR,
        0x2: Opcode.AND,
        0x3: Opcode.XOR,
        0x4: Opcode.ADD_VX_VY,
        0x5: Opcode.SUB,
        0x6: Opcode.SHR,
        0x7: Opcode.SUBN,
        0xE: Opcode.SHL,
    }),
    0x9: (0x000F, {
        0x0: Opcode.SNE_VX_VY,
    }),
    0xE: (0x00FF, {
        0x9E: Opcode.SKP,
        0xA1: Opcode.SKNP,
    }),
    0xF: (0x00FF, {
        0x07: Opcode.LD_VX_DT,
        0x0A: Opcode.LD_VX_K,
        0x15: Opcode.LD_DT_VX,
        0x18: Opcode.LD_ST_VX,
        0x1E: Opcode.ADD_I_VX,
        0x29: Opcode.LD_F_VX,
        0x33: Opcode.LD_B_VX,
        0x55: Opcode.LD_I_VX,
        0x65: Opcode.LD_VX_I,
    }),
}

# @intent:map Opcodeから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Opcode.RET: control.execute_ret,
    Opcode.JP: control.execute_jp,
    Opcode.CALL: control.execute_call,
    Opcode.JP_V0: control.execute_jp_v0,
    Opcode.SE_VX_NN: control.execute_se_vx_nn,
    Opcode.SNE_VX_NN: control.execute_sne_vx_nn,
    Opcode.SE_VX_VY: control.execute_se_vx_vy,
    Opcode.SNE_VX_VY: control.execute_sne_vx_vy,

    # ALU
    Opcode.LD_VX_NN: alu.execute_ld_vx_nn,
    Opcode.ADD_VX_NN: alu.execute_add_vx_nn,
    Opcode.LD_VX_VY: alu.execute_ld_vx_vy,
    Opcode.OR: alu.execute_or,
    Opcode.AND: alu.execute_and,
    Opcode.XOR: alu.execute_xor,
    Opcode.ADD_VX_VY: alu.execute_add_vx_vy,
    Opcode.SUB: alu.execute_sub,
    Opcode.SHR: alu.execute_shr,
    Opcode.SUBN: alu.execute_subn,
    Opcode.SHL: alu.execute_shl,
    Opcode.RND: alu.execute_rnd,

    # Load / Timers
    Opcode.LD_I: load.execute_ld_i,
    Opcode.ADD_I_VX: load.execute_add_i_vx,
    Opcode.LD_F_VX: load.execute_ld_f_vx,
    Opcode.LD_B_VX: load.execute_ld_b_vx,
    Opcode.LD_I_VX: load.execute_ld_i_vx,
    Opcode.LD_VX_I: load.execute_ld_vx_i,
    Opcode.LD_VX_DT: load.execute_ld_vx_dt,
    Opcode.LD_DT_VX: load.execute_ld_dt_vx,
    Opcode.LD_ST_VX: load.execute_ld_st_vx,

    # Display
    Opcode.CLS: display.execute_cls,
    Opcode.DRW: display.execute_drw,

    # Keys
    Opcode.SKP: keys.execute_skp,
    Opcode.SKNP: keys.execute_sknp,
    Opcode.LD_VX_K: keys.execute_ld_vx_k,
}

# @intent:invariant 全てのOpcodeに実行関数が存在すること。欠落はインポート時に検出します。
_missing = [op.name for op in Opcode if op not in EXECUTE_MAP]
if _missing:
    raise RuntimeError(f"No executor registered for: {', '.join(_missing)}")
