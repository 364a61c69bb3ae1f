import re

ORDER_NAME_PATTERN = re.compile(r'^Order (\d+)$')


def next_order_name(existing_names) -> str:
    """
    Lowest unused "Order N" (N >= 1).

    Numbers freed by deleted or submitted tabs are reused, so with
    "Order 1" and "Order 3" open the next tab is "Order 2".
    """
    taken = set()
    for name in existing_names:
        match = ORDER_NAME_PATTERN.match(name)
        if match:
            taken.add(int(match.group(1)))

    number = 1
    while number in taken:
        number += 1
    return f"Order {number}"
