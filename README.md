# dgengine

Core plumbing for a game or interactive application. It uses only the
standard library.

## What is in it

- `dgengine.input_codes` holds the `InputCode`, `InputEvent` and `KeyMod` enums.
  It also has `input_code_name` and `input_event_name`, which return names such
  as `"IC_KEY_A"`, or `"BAD INPUT"` for an unknown value. `full_input_code` packs
  a code and an event into one 32-bit value.
- `dgengine.message` holds the typed messages, for example `GuiPointerDown`,
  `GuiPointerMove`, `WindowResized`, `InputKey` and `MessageCommand`. Each message
  type gets a unique id that encodes its `MessageCategory`. Messages carry
  `MessageFlag` flags.
- `dgengine.message_bus` holds `MessageBus`, a thread-safe queue. It passes each
  message to a list of handlers in order and stops once a handler sets
  `MessageFlag.HANDLED`. The module also has a shared bus, used through `init`,
  `instance`, `post` and `shut_down`.
- `dgengine.render_state` holds `RenderState`, a 64-bit sort key with named bit
  fields (`Attr`). The values for those fields come from `StateType`, `Command`,
  `StateSystem` and `Translucency`.
- `dgengine.command_queue` holds `RenderCommandQueue`. Commands are submitted to
  a write buffer. `swap` turns that buffer into the read buffer, and `execute`
  runs the read buffer in submission order.
- `dgengine.renderer` holds `Renderer`, which records calls such as `clear`,
  `set_clear_color`, `set_scissor_box`, `enable`, `disable` and `draw_indexed` as
  queued commands. The commands call a `RendererBackend` of your own. The renderer
  tracks feature states and the scissor box as a `GlobalRenderState`.
- `dgengine.render_thread` holds `RenderThread`, which runs a frame callable on
  its own thread, one frame per `resume`. It waits for the main thread between
  frames, and `sync` waits for the current frame to finish. It owns a
  `GraphicsContext` that you supply.
- `dgengine.render_common` holds `RenderFeature`, `RenderMode`, `IndexDataType`,
  `index_data_type_size` and `RenderResource`. A `RenderResource` is an object
  with a unique id.
- `dgengine.mem_buffer` holds the bump allocators `MemBuffer` and
  `MemBufferDynamic`, plus a shared scratch buffer (`temp_alloc`, `temp_clear`).
- `dgengine.binding_point` allocates uniform and shader-storage binding points
  (`BindingPointTable`, `BindingPoint`).
- `dgengine.group` holds `GroupStack`, which provides the nested group ids used
  to tag render commands.
- `dgengine.log` sets up the engine logger: `init_stdout`, `init_file` and
  `get_logger`.

## What it does not do

There is no graphics backend, window or GUI here. `Renderer` and `RenderThread`
only queue and schedule work. Drawing happens in the `RendererBackend` and
`GraphicsContext` objects you pass in.

## Installation

```
pip install .
```

## Example: the message bus

```python
from dgengine import message_bus
from dgengine.message import GuiPointerDown, MessageFlag

message_bus.init()

def on_message(msg):
    if isinstance(msg, GuiPointerDown):
        print("pointer down at", msg.x, msg.y)
        msg.set_flag(MessageFlag.HANDLED, True)

message_bus.post(GuiPointerDown(x=10, y=20))
message_bus.instance().dispatch_messages([on_message], 0)
message_bus.shut_down()
```

With a `cycles` argument of `0`, `dispatch_messages` keeps going until no
messages are left, including any that handlers post while it runs.

## Example: render state keys

```python
from dgengine.render_state import Attr, Command, RenderState, StateType

state = RenderState.create()
state.set(Attr.TYPE, StateType.COMMAND)
state.set(Attr.COMMAND, Command.CLEAR)
assert state.get(Attr.COMMAND) == Command.CLEAR
```

## Example: recording and running commands

```python
from dgengine.renderer import Renderer

class PrintBackend:
    def clear(self, colour): print("clear", colour)
    def set_clear_color(self, r, g, b, a): print("clear colour", r, g, b, a)
    def set_scissor_box(self, x, y, w, h): print("scissor", x, y, w, h)
    def enable(self, feature): print("enable", feature)
    def disable(self, feature): print("disable", feature)
    def draw_indexed(self, mode, data_type, instance_count, element_count):
        print("draw", mode, data_type, instance_count, element_count)

renderer = Renderer(PrintBackend())
renderer.clear((0.0, 0.0, 0.0, 1.0))
renderer.swap_buffers()            # recorded commands become readable
renderer.execute_render_commands() # prints "clear (0.0, 0.0, 0.0, 1.0)"
```

## Running the tests

```
pip install .[test]
pytest
```