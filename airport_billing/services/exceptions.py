# airport_billing/services/exceptions.py


class CheckoutError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCart(CheckoutError):
    pass


class InsufficientStock(CheckoutError):
    """Requested quantity exceeds stock, or the product does not exist for this shop."""

    def __init__(self, product_id: int, product_name: str | None = None):
        self.product_id = product_id
        self.product_name = product_name or "product"
        super().__init__(f"Not enough stock for {self.product_name}")


class PersistenceFailure(CheckoutError):
    status_code = 500
