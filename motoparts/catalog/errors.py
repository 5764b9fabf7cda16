class ProductNotFound(LookupError):
    """Raised when a product id does not resolve against the loaded catalog."""

    def __init__(self, product_id):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id
