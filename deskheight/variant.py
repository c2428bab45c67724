"""Known desk controller protocols and the decoders that read them."""

from __future__ import annotations

import enum

from .decoders import Decoder, JarvisDecoder, OmnideskDecoder, PokarDecoder, UpliftDecoder


class DecoderVariant(enum.IntEnum):
    """Desk controller protocols, in the order that detection tries them."""

    UNKNOWN = 0
    JARVIS = 1
    UPLIFT = 2
    OMNIDESK = 3
    POKAR = 4


_NAMES = {
    DecoderVariant.JARVIS: "jarvis",
    DecoderVariant.UPLIFT: "uplift",
    DecoderVariant.OMNIDESK: "omnidesk",
    DecoderVariant.POKAR: "pokar",
}

_FACTORIES: dict[DecoderVariant, type[Decoder]] = {
    DecoderVariant.JARVIS: JarvisDecoder,
    DecoderVariant.UPLIFT: UpliftDecoder,
    DecoderVariant.OMNIDESK: OmnideskDecoder,
    DecoderVariant.POKAR: PokarDecoder,
}


def variant_name(variant: int) -> str:
    """Return the configuration name of a variant; anything unrecognised is "unknown"."""
    try:
        return _NAMES.get(DecoderVariant(variant), "unknown")
    except ValueError:
        return "unknown"


def make_decoder(variant: int) -> Decoder | None:
    """Return a fresh decoder for the variant, or None for UNKNOWN."""
    try:
        variant = DecoderVariant(variant)
    except ValueError:
        raise ValueError(f"unknown decoder variant {variant!r}") from None
    factory = _FACTORIES.get(variant)
    return factory() if factory is not None else None