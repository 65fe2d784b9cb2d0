"""
Reference Codec 8 frame: four records followed by the closing record count
"""

SAMPLE_FRAME_HEX = (
    "080400000113fc208dff000f14f650209cca80006f00d6040004000403010115031603"
    "0001460000015d0000000113fc17610b000f14ffe0209cc580006e00c0050001000403"
    "0101150316010001460000015e0000000113fc284945000f150f00209cd20000950108"
    "0400000004030101150016030001460000015d0000000113fc267c5b000f150a50209c"
    "ccc0009300680400000004030101150016030001460000015b0004"
)

SAMPLE_FRAME = bytes.fromhex(SAMPLE_FRAME_HEX)
