"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error bound to a single input field."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class CategoryHasChildrenError(BusinessRuleViolationError):
    """Raised when deleting a category that still has children."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__("Cannot delete category with children")


class CategoryHasPostsError(BusinessRuleViolationError):
    """Raised when deleting a category that still has posts."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__("Cannot delete category with posts")


class CategoryCycleError(BusinessRuleViolationError):
    """Raised when a parent assignment or tree walk would loop."""

    def __init__(self, category_id: str, parent_id: str):
        self.category_id = category_id
        self.parent_id = parent_id
        super().__init__(
            f"Category {parent_id} cannot be the parent of category {category_id}"
        )


class AlreadyLikedError(BusinessRuleViolationError):
    """Raised when a user likes a post twice."""

    def __init__(self, post_id: str, user_id: str):
        self.post_id = post_id
        self.user_id = user_id
        super().__init__("Post already liked")


class NotLikedError(BusinessRuleViolationError):
    """Raised when a user unlikes a post they never liked."""

    def __init__(self, post_id: str, user_id: str):
        self.post_id = post_id
        self.user_id = user_id
        super().__init__("Post not liked")


class NotAuthorizedError(DomainError):
    """Raised when a user acts on content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
