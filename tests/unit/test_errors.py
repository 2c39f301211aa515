from products_api.domain.errors import ErrorKind, ProductApiError


def test_not_found_message_and_status() -> None:
    error = ProductApiError.not_found("Product")

    assert error.kind is ErrorKind.NOT_FOUND
    assert error.status_code == 404
    assert str(error) == "Product: Product not found"
    assert error.resource == "Product"
    assert error.details == []


def test_validation_carries_details() -> None:
    error = ProductApiError.validation(details=["name: Field required"])

    assert error.status_code == 400
    assert error.message == "Validation failed"
    assert error.details == ["name: Field required"]


def test_status_codes_per_kind() -> None:
    assert ProductApiError.authentication().status_code == 401
    assert ProductApiError(ErrorKind.CONFLICT, "dup").status_code == 409
    assert ProductApiError(ErrorKind.INTERNAL, "boom").status_code == 500
