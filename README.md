# deskheight

Decode the serial traffic between a motorised standing desk's control box and
its keypad into a height reading.

Several controller protocols are supported:

| Variant    | `DecoderVariant` | Decoder class     |
|------------|------------------|-------------------|
| `jarvis`   | `JARVIS`         | `JarvisDecoder`   |
| `uplift`   | `UPLIFT`         | `UpliftDecoder`   |
| `omnidesk` | `OMNIDESK`       | `OmnideskDecoder` |
| `pokar`    | `POKAR`          | `PokarDecoder`    |

- **Jarvis**: framed messages that start with two `0xF2` address bytes. Each
  message has a command byte, a length, up to five arguments and a checksum.
  Only height reports (command `0x01`) complete a reading. The height is the
  first two arguments, read big-endian, divided by 10.
- **Uplift**: `0x01 0x01`, then a high byte of `0x00` or `0x01`, then a low
  byte. The height is the 16-bit big-endian value divided by 10.
- **Omnidesk**: the same framing as Uplift. It also accepts high bytes
  `0x02`, `0x03` and `0x04`.
- **Pokar**: `0x5A`, three seven-segment display bytes, `0x01`, then a
  checksum byte. The checksum is not verified. The dot segment on the middle
  digit divides the value by 10. `decode_7seg` turns one display byte into its
  digit. It ignores the dot bit and returns `-1` for a pattern it does not
  recognise.

## Installation

```
pip install deskheight
```

## Decoding bytes directly

Give a decoder the bytes one at a time as integers from 0 to 255. A value
outside that range raises `ValueError`. `put` returns `True` once a complete
height frame has been received, and `decode` then returns the height.

```python
from deskheight.decoders import UpliftDecoder

decoder = UpliftDecoder()
for byte in b"\x01\x01\x01\x2c":
    if decoder.put(byte):
        print(decoder.decode())   # 30.0
```

All decoders derive from the abstract base class `Decoder`.

`deskheight.variant` lets you pick a decoder by protocol:

- `DecoderVariant` is an `IntEnum`: `UNKNOWN` (0), `JARVIS`, `UPLIFT`,
  `OMNIDESK` and `POKAR`.
- `make_decoder(variant)` returns a new decoder. For `UNKNOWN` it returns
  `None`, and for a value that is not a variant it raises `ValueError`.
- `variant_name(variant)` returns the short name. Anything unrecognised,
  `UNKNOWN` included, gives `"unknown"`.

```python
from deskheight.variant import DecoderVariant, make_decoder, variant_name

decoder = make_decoder(DecoderVariant.JARVIS)
print(variant_name(DecoderVariant.JARVIS))   # jarvis
```

## The polling sensor

`StandingDeskHeightSensor(uart, publish=None, variant=DecoderVariant.UNKNOWN, clock=None)`
works with these arguments:

- `uart` is any object whose `read()` method returns the bytes waiting at that
  moment, without blocking.
- `publish` is called with each new height.
- `clock` returns the time in milliseconds. By default it uses
  `time.monotonic`.

What each method does:

- `setup()` starts automatic detection if no variant was given.
- `loop()` feeds the waiting bytes to the current decoder and moves detection
  forward. Detection tries each variant in turn, in enum order. It keeps the
  first variant that produces a reading within 1000 ms. If none of them does,
  it logs a warning, removes the decoder and leaves the variant at `UNKNOWN`.
- `update()` publishes the latest height if it is positive and differs from
  the last one published.
- `set_decoder_variant(variant)` switches protocol by hand.
- `start_decoder_detection()` restarts detection.
- `dump_config()` logs the configuration and returns it as text.

`DetectDecoderAction(sensor).play()` restarts detection, for use as an
automation action.

```python
from deskheight.sensor import DetectDecoderAction, StandingDeskHeightSensor

sensor = StandingDeskHeightSensor(uart, publish=print)
sensor.setup()

# call these periodically
sensor.loop()
sensor.update()

DetectDecoderAction(sensor).play()
print(sensor.dump_config())
```

Progress is reported through the standard `logging` module, under the logger
`deskheight.sensor`.

## What it does not do

The package does not open serial ports or schedule polling. You supply the
byte source and call `loop()` and `update()` yourself. It also has no
command-line tool, and it cannot send commands to the desk.