import logging

import pytest

from deskheight.decoders import UpliftDecoder
from deskheight.sensor import DetectDecoderAction, StandingDeskHeightSensor
from deskheight.variant import DecoderVariant

UPLIFT_FRAME = bytes([0x01, 0x01, 0x01, 0x2C])


class FakeUart:
    def __init__(self):
        self.pending = bytearray()

    def feed(self, data):
        self.pending.extend(data)

    def read(self):
        data = bytes(self.pending)
        self.pending.clear()
        return data


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def expected_uplift_height():
    dec = UpliftDecoder()
    for b in UPLIFT_FRAME:
        dec.put(b)
    return dec.decode()


@pytest.fixture
def rig():
    uart, clock, published = FakeUart(), FakeClock(), []
    return uart, clock, published


def make(rig, variant=DecoderVariant.UNKNOWN):
    uart, clock, published = rig
    return StandingDeskHeightSensor(uart, published.append, variant, clock)


def test_fixed_variant_reads_and_publishes_once(rig):
    uart, clock, published = rig
    sensor = make(rig, DecoderVariant.UPLIFT)
    sensor.setup()
    assert sensor.is_detecting is False
    uart.feed(UPLIFT_FRAME)
    sensor.loop()
    assert sensor.last_read == expected_uplift_height()
    sensor.update()
    sensor.update()
    assert published == [expected_uplift_height()]


def test_update_without_reading_publishes_nothing(rig):
    _, _, published = rig
    sensor = make(rig, DecoderVariant.UPLIFT)
    sensor.update()
    assert published == []
    assert sensor.last_read == -1


def test_detection_starts_with_first_decoder(rig):
    sensor = make(rig)
    sensor.setup()
    assert sensor.variant == DecoderVariant.JARVIS
    assert sensor.is_detecting is True


def test_detection_does_not_advance_at_exact_timeout(rig):
    _, clock, _ = rig
    sensor = make(rig)
    sensor.setup()
    clock.now = 1000
    sensor.loop()
    assert sensor.variant == DecoderVariant.JARVIS


def test_detection_finds_uplift(rig, caplog):
    uart, clock, _ = rig
    sensor = make(rig)
    sensor.setup()
    clock.now = 1001
    sensor.loop()
    assert sensor.variant == DecoderVariant.UPLIFT
    uart.feed(UPLIFT_FRAME)
    with caplog.at_level(logging.INFO, logger="deskheight.sensor"):
        sensor.loop()
    assert sensor.is_detecting is False
    assert sensor.variant == DecoderVariant.UPLIFT
    assert "  variant: uplift" in caplog.messages
    clock.now = 5000
    sensor.loop()
    assert sensor.variant == DecoderVariant.UPLIFT


def test_detection_gives_up_after_last_variant(rig):
    _, clock, _ = rig
    sensor = make(rig)
    sensor.setup()
    seen = [sensor.variant]
    for _ in range(len(DecoderVariant) - 1):
        clock.now += 1001
        sensor.loop()
        seen.append(sensor.variant)
    assert seen == list(DecoderVariant)[1:] + [DecoderVariant.UNKNOWN]
    assert sensor.decoder is None
    assert sensor.is_detecting is False


def test_loop_without_decoder_discards_bytes(rig):
    uart, _, _ = rig
    sensor = make(rig)
    uart.feed(UPLIFT_FRAME)
    sensor.loop()
    assert uart.pending == bytearray()
    assert sensor.last_read == -1


def test_invalid_variant_raises(rig):
    sensor = make(rig, DecoderVariant.POKAR)
    with pytest.raises(ValueError):
        sensor.set_decoder_variant(17)
    assert sensor.variant == DecoderVariant.POKAR


def test_dump_config_names_variant(rig):
    sensor = make(rig, DecoderVariant.POKAR)
    text = sensor.dump_config()
    assert text.splitlines() == ["Standing Desk Height:", "  Decoder Variant: pokar"]


def test_action_restarts_detection(rig):
    sensor = make(rig, DecoderVariant.POKAR)
    sensor.setup()
    DetectDecoderAction(sensor).play("ignored", 1)
    assert sensor.variant == DecoderVariant.JARVIS
    assert sensor.is_detecting is True