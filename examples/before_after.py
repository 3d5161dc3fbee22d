"""
Before/after conversion example.

Encodes a small order record, shows what the decoder can and cannot read
back, and measures the token savings.
"""

from toon_convert import FormatComparison, ToonDecoder, encode, to_json

ORDER = {
    "orderId": "ORD-2024-001",
    "customer": {"id": 12345, "name": "John Doe", "city": "New York"},
    "items": [
        {"sku": "PROD-001", "name": "Laptop", "qty": 1, "price": 999.99},
        {"sku": "PROD-002", "name": "Mouse", "qty": 2, "price": 29.99},
        {"sku": "PROD-003", "name": "Keyboard, wireless", "qty": 1, "price": 79.99},
    ],
    "note": "Leave at the door: back entrance",
}

if __name__ == "__main__":
    print("=" * 60)
    print("JSON -> TOON: BEFORE / AFTER")
    print("=" * 60)

    toon = encode(ORDER)
    print("\n📄 JSON:")
    print(to_json(ORDER, pretty=True))
    print("\n📦 Toon:")
    print(toon)

    # The decoder reads one construct at a time and ignores indentation
    print("\n" + "-" * 60)
    print("Decoder, construct by construct:")
    for value in ToonDecoder().decode_all(toon):
        print(f"  {value!r}")

    print("\n" + "-" * 60)
    comparison = FormatComparison()
    result = comparison.compare(ORDER, "Order")
    print(comparison.render_table(result))
    print(f"\n💰 Savings vs compact JSON: {result.savings_vs_compact}%")
    print(f"   Tokens saved per call:   {result.tokens_saved}")
