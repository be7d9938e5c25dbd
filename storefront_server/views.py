"""Text rendering of the catalog and cart."""

from .models import Cart, CatalogState, CatalogStatus, Product
from .pricing import format_money


def _label(product: Product) -> str:
    return f"{product.image} {product.name}".strip()


def render_product(product: Product) -> str:
    """Render a single product card."""
    lines = [_label(product)]
    lines.append(f"   ID: {product.id}")
    lines.append(f"   Price: {format_money(product.price)}")
    return "\n".join(lines)


def render_status(state: CatalogState) -> str:
    if state.status is CatalogStatus.FAILED:
        return f"Error: {state.error}"
    if state.status is CatalogStatus.LOADING:
        return "Loading products..."
    return f"{len(state.products)} product(s) available"


def render_product_list(state: CatalogState) -> str:
    """Render the catalog, or its loading/error status."""
    if state.status is not CatalogStatus.READY:
        return render_status(state)

    if not state.products:
        return "No products available"

    result_lines = [f"Products ({len(state.products)}):\n"]
    for i, product in enumerate(state.products, 1):
        result_lines.append(f"\n{i}. {render_product(product)}")
    return "\n".join(result_lines)


def render_cart(cart: Cart) -> str:
    """Render the cart lines followed by its totals."""
    if not cart.items:
        return "Your cart is empty"

    result_lines = [f"Shopping Cart ({cart.item_count} items):\n"]
    for i, item in enumerate(cart.items, 1):
        product = item.product
        result_lines.append(f"\n{i}. {_label(product)}")
        result_lines.append(f"   Product ID: {product.id}")
        result_lines.append(f"   {format_money(product.price)} × {item.quantity}")
        result_lines.append(f"   Line total: {format_money(item.line_total)}")

    result_lines.append(f"\n{'='*50}")
    result_lines.append(f"Subtotal: {format_money(cart.subtotal)}")
    if cart.discounted_total != cart.subtotal:
        result_lines.append(f"After discount: {format_money(cart.discounted_total)}")
    result_lines.append(f"Tax: {format_money(cart.tax)}")
    result_lines.append(f"Total: {format_money(cart.total)}")
    if cart.discount_percent:
        result_lines.append(f"\n{cart.discount_percent.normalize():f}% discount applied!")

    return "\n".join(result_lines)
