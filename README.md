# dagfx

Pure-Python building blocks for the rendering side of a console action RPG
engine. The package decodes and builds the binary structures that the engine
exchanges with the graphics synthesizer (GS) and with its disc file system.
Every function takes bytes or plain values and returns bytes, tuples of words
or plain values. No hardware is involved.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `dagfx.matrix` | `Matrix3x3`, `Matrix3x4` and `Matrix4x4`, stored as columns. Provides `identity()`, `Matrix3x4.translate` (in place) and `mul_3x4_4x4(m1, m2)`, which returns `m2 . m1`. |
| `dagfx.giftag` | `GIFTag` and `parse_giftag`, which decode a 16-byte little-endian GIF tag. A `nreg` of 0 is read as 16. |
| `dagfx.font` | `Font`, `GlyphInfo` and `GlyphKernPair`, plus `chars_to_glyphs`, `measure_text_w` and `measure_text`. The two measuring functions return text widths in pixels with kerning applied. Kerning counts double when `interlaced` is true. |
| `dagfx.frame_functions` | `FrameFunctionRegistry` and `FrameFunctionDef`. Callbacks are kept in priority order, lower values first and stable for equal values. Registering the same function twice is ignored. The registry holds at most 16 entries, and `OverflowError` is raised beyond that. |
| `dagfx.dlist` | `DisplayList`, `DlistNode` and `DlistTexture`: two banks of eight slot-ordered linked lists. Packets that share a texture within a frame are grouped together. Also provides `flush_and_finish_packet()`. |
| `dagfx.gs_display` | `GSReg`, `OutputMode`, `GsParams` and `GsDispEnv`, the register encoders `build_display`, `build_tex0` and `build_pmode`, plus `default_display_env`, `is_progressive_mode` and `disabled_pmode`. |
| `dagfx.draw` | `build_sprite_packet`, which returns the 64-bit words of a textured sprite packet. `SpriteDrawer` queues such packets into a `DisplayList`. |
| `dagfx.frame_end_dma` | The end-of-frame programs: `build_480p_end_frame_dma`, `build_interlaced_end_frame_dma`, `build_frame_dma_prog(params)` and `build_init_display_packet()`. Also `make_uv` and `make_xy`. |
| `dagfx.frame_start_dma` | `FrameStarter`, which builds the frame-clear programs with `start_interlaced`, `start_480p` and `start_frame`. It carries the field Y offset from one frame to the next. |
| `dagfx.iso_directory` | `make_cdrom_path`, `parse_directory_sector`, `IsoFileEntry` and `ReadRequest`. `IsoFileTable` provides `from_sectors`, `find` and `read_request`. `read_request` raises `FileNotFoundError` for unknown names. |

## Examples

Multiply a 3x4 transform into a 4x4 matrix:

```python
from dagfx.matrix import Matrix3x4, Matrix4x4, mul_3x4_4x4

m = Matrix3x4.identity().translate(1.0, 2.0, 3.0)
identity4 = Matrix4x4([[1.0 if r == c else 0.0 for r in range(4)] for c in range(4)])
out = mul_3x4_4x4(m, identity4)
print(out.cells[3])   # [1.0, 2.0, 3.0, 1.0]
```

Register frame callbacks by priority:

```python
from dagfx.frame_functions import FrameFunctionRegistry

def read_input(): ...
def draw_menu(): ...

registry = FrameFunctionRegistry()
registry.register(draw_menu, 100, "menu")
registry.register(read_input, 1, "input")
print(registry.names())   # ['input', 'menu']
```

Decode a GIF tag:

```python
from dagfx.giftag import parse_giftag

tag = parse_giftag(bytes.fromhex("01800000000000100e00000000000000"))
print(tag.nloop, tag.eop, tag.nreg, tag.regs)   # 1 True 1 (14,)
```

Look up a file in a disc directory and work out which sectors to read:

```python
from dagfx.iso_directory import IsoFileTable, make_cdrom_path

table = IsoFileTable.from_sectors(sectors)   # raw 2048-byte directory sectors
request = table.read_request("ratgiant.lmp")
print(make_cdrom_path("ratgiant.lmp"))   # RATGIANT.LMP;1
print(request.sector_start, request.num_sectors)
```

## What the package does not do

The package builds and parses data and stops there. It does not send DMA
packets anywhere, talk to a disc drive or run a frame loop. The caller
supplies the directory sectors and consumes the packets. It has no command-line
tool, and it does not load data regions out of executable images.