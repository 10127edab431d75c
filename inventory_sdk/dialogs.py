# inventory_sdk/dialogs.py
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .forms import IconSelector, draft_from_product, empty_draft, validate_draft
from .store import ActionResult, Product, ProductStore

logger = logging.getLogger(__name__)

# (message, is_success) -> None; the front end decides how a toast looks.
Notify = Callable[[str, bool], None]


def _log_notification(message: str, is_success: bool) -> None:
    logger.log(logging.INFO if is_success else logging.WARNING, message)


class DialogState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class ProductDialog:
    """Add/edit form bound to a :class:`ProductStore`.

    Visibility lives in the store (``open_product_dialog``) so row actions
    raised by the table open the same dialog. The draft and field errors live
    here and survive a failed submit.
    """

    def __init__(self, store: ProductStore, notify: Optional[Notify] = None):
        self.store = store
        self.notify = notify or _log_notification
        self.icons = IconSelector()
        self.draft: Dict[str, str] = empty_draft()
        self.errors: Dict[str, str] = {}
        self.editing: Optional[Product] = None
        self._submitting = False

    @property
    def state(self) -> DialogState:
        if self._submitting:
            return DialogState.SUBMITTING
        return DialogState.OPEN if self.store.open_product_dialog else DialogState.CLOSED

    @property
    def is_editing(self) -> bool:
        return self.editing is not None

    def open_new(self) -> None:
        self.store.begin_add()
        self.prepare()

    def open_edit(self, product: Product) -> None:
        self.store.begin_edit(product)
        self.prepare()

    def prepare(self) -> None:
        """Load the draft from the store's selection (edit) or blank it (add)."""
        selected = self.store.selected_product
        self.errors = {}
        if selected is not None:
            self.editing = dict(selected)
            self.draft = draft_from_product(selected)
            self.icons.select(self.draft["icon"])
        else:
            self.editing = None
            self.draft = empty_draft()
            self.icons.reset()
            self.draft["icon"] = self.icons.selected

    def set_field(self, field: str, value: Any) -> None:
        if field not in self.draft:
            raise KeyError(field)
        if field == "icon":
            self.select_icon(value)
            return
        self.draft[field] = "" if value is None else str(value)

    def select_icon(self, name: Optional[str]) -> None:
        self.draft["icon"] = self.icons.select(name)

    def close(self) -> None:
        self.store.set_open_product_dialog(False)
        self.store.set_selected_product(None)
        self.editing = None
        self.errors = {}
        self.draft = empty_draft()
        self.icons.reset()

    async def submit(self) -> ActionResult:
        form, errors = validate_draft(self.draft)
        self.errors = errors
        if form is None:
            return ActionResult(False, "Please fix the highlighted fields")

        editing = self.editing
        self._submitting = True
        try:
            if editing is not None:
                record = {**editing, **form.to_payload()}
                result = await self.store.update_product(record)
            else:
                now = datetime.now(timezone.utc).isoformat()
                # provisional id; the server assigns the real one
                record = {"id": uuid.uuid4().hex, **form.to_payload(), "createdAt": now}
                result = await self.store.add_product(record)
        finally:
            self._submitting = False

        if result.success:
            if editing is not None:
                self.notify(f"The product {form.name} has been updated successfully!", True)
            else:
                self.notify(f"The product {form.name} has been added successfully!", True)
            self.close()
            return result

        self.notify(f"Something went wrong: {result.error or 'request failed'}", False)
        if editing is not None:
            # the store closes the edit dialog on every outcome; reopen it on
            # the same record and keep what the user typed
            draft = dict(self.draft)
            self.store.begin_edit(editing)
            self.editing = editing
            self.draft = draft
        return result


class DeleteDialog:
    """Confirmation step before a product is deleted for good."""

    def __init__(self, store: ProductStore, notify: Optional[Notify] = None):
        self.store = store
        self.notify = notify or _log_notification

    @property
    def is_open(self) -> bool:
        return self.store.open_delete_dialog

    @property
    def target(self) -> Optional[Product]:
        return self.store.selected_product if self.store.open_delete_dialog else None

    async def confirm(self) -> ActionResult:
        target = self.target
        if target is None:
            return ActionResult(False, "No product selected")
        result = await self.store.delete_product(str(target.get("id")))
        if result.success:
            self.notify(f"The product {target.get('name')} has been deleted successfully!", True)
        else:
            self.notify(f"Failed to delete {target.get('name')}: {result.error or 'request failed'}", False)
        return result

    def cancel(self) -> None:
        self.store.set_selected_product(None)
        self.store.set_open_delete_dialog(False)
