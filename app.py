# ============================================================================
#  SHOPCART — catalog browser, cart, and product manager
#
#  app.py          window + dialogs (PySide6)
#  engine.py       form parsing / validation / details text
#  core/           Product, CartItem, Cart, Catalog, checkout, ShopSession
#  lore/           chronicles + event ledger + debug log
#  config/         seed catalog (catalog.json)
# ============================================================================

import os, sys, datetime
from pathlib import Path
try:
    APP_DIR = str(Path(__file__).resolve().parent)
except NameError:
    APP_DIR = str(Path.cwd())
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

from PySide6.QtGui import QFont, QPixmap
from PySide6.QtCore import Qt, QSettings
from PySide6.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QListWidget, QListWidgetItem, QFileDialog, QDialog, QFormLayout,
    QLineEdit, QSpinBox, QGroupBox, QSplitter, QTextEdit, QMessageBox)

from core.checkout import EmptyCart
from core.model import MAX_QUANTITY, MIN_QUANTITY
from core.pricing import fmt_money
from core.session import ShopSession, open_session
from engine import InvalidPrice, MissingField, parse_quantity, product_details, resolve_image
from lore import lorekeeper

APP_FRIENDLY_NAME = "ShopCart"
IMAGE_W, IMAGE_H = 150, 120

PANEL_BG = "#add8e6"
LIST_BG = "#f0fff0"
BTN_STYLE = "QPushButton { background:#556b2f; color:white; padding:4px 10px; }"
CHECKOUT_STYLE = "QPushButton { background:#228b22; color:white; padding:4px 10px; }"

def _chronicle(event: str, details=None):
    try:
        lorekeeper.log_app_event(event, details or [])
    except Exception as e:
        lorekeeper.debug(e, f"chronicle:{event}")


# ------------------------- Manage Products -------------------------
class ProductManagerDialog(QDialog):
    """
    Add / remove catalog products. Every change goes through the session,
    then `on_changed` lets the main window re-render its catalog list.
    """
    def __init__(self, parent, session: ShopSession, on_changed=None):
        super().__init__(parent)
        self.setWindowTitle("Manage Products")
        self.resize(460, 560)
        self.session = session
        self._on_changed = on_changed
        self._image_path = None

        lay = QVBoxLayout(self)

        form = QFormLayout()
        self.name = QLineEdit()
        self.price = QLineEdit(); self.price.setPlaceholderText("e.g. 499.99")
        self.description = QLineEdit()
        self.image_label = QLabel("No file selected")
        upload = QPushButton("Upload Image"); upload.clicked.connect(self._choose_image)
        form.addRow("Product Name:", self.name)
        form.addRow("Price (₹):", self.price)
        form.addRow("Description:", self.description)
        form.addRow("Upload Product Image:", upload)
        form.addRow("", self.image_label)
        fw = QWidget(); fw.setLayout(form)
        lay.addWidget(fw)

        self.list = QListWidget()
        lay.addWidget(self.list, 1)

        row = QHBoxLayout()
        add_btn = QPushButton("➕ Add Product"); add_btn.clicked.connect(self._add_product)
        rm_btn = QPushButton("❌ Remove Selected"); rm_btn.clicked.connect(self._remove_selected)
        close_btn = QPushButton("Close"); close_btn.clicked.connect(self.accept)
        row.addWidget(add_btn); row.addWidget(rm_btn); row.addStretch(1); row.addWidget(close_btn)
        rw = QWidget(); rw.setLayout(row)
        lay.addWidget(rw)

        self._refresh_list()

    def _refresh_list(self):
        self.list.clear()
        for p in self.session.catalog:
            self.list.addItem(QListWidgetItem(str(p)))

    def _choose_image(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Choose product image", APP_DIR,
            "Images (*.png *.jpg *.jpeg *.gif *.bmp);;All files (*)")
        if path:
            self._image_path = os.path.abspath(path)
            self.image_label.setText(os.path.basename(path))

    def _reset_form(self):
        self.name.clear()
        self.price.clear()
        self.description.clear()
        self.image_label.setText("No file selected")
        self._image_path = None

    def _add_product(self):
        try:
            self.session.add_catalog_product(
                self.name.text(), self.price.text(), self.description.text(), self._image_path)
        except (InvalidPrice, MissingField) as e:
            QMessageBox.warning(self, "Manage Products", str(e))
            return
        self._reset_form()
        self._refresh_list()
        self._notify()

    def _remove_selected(self):
        row = self.list.currentRow()
        if row < 0 or row >= len(self.session.catalog):
            QMessageBox.information(self, "Manage Products", "Select a product to remove.")
            return
        self.session.remove_catalog_product(self.session.catalog[row])
        self._refresh_list()
        self._notify()

    def _notify(self):
        if self._on_changed:
            self._on_changed()


# -------------------------- Main Window --------------------------
class Main(QMainWindow):
    def __init__(self, session: ShopSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self._shown = None  # product in the details pane

        _app_font = QFont()
        _app_font.setPointSize(13)
        self.setFont(_app_font)
        self.setWindowTitle("🛒 Online Shopping Cart")
        self.resize(1000, 650)

        self.split = QSplitter(Qt.Horizontal)
        self.split.setChildrenCollapsible(False)
        self.split.addWidget(self._build_catalog_panel())
        self.split.addWidget(self._build_cart_panel())
        self.split.setStretchFactor(0, 3)
        self.split.setStretchFactor(1, 2)

        cw = QWidget()
        cw.setStyleSheet(f"background:{PANEL_BG};")
        root = QVBoxLayout(cw)
        root.setContentsMargins(10, 10, 10, 10)
        root.addWidget(self.split, 1)
        self.setCentralWidget(cw)

        # [geometry-load]
        try:
            s = QSettings(APP_FRIENDLY_NAME, APP_FRIENDLY_NAME)
            if (geo := s.value("main/geometry", None)) is not None:
                self.restoreGeometry(geo)
        except Exception as e:
            lorekeeper.debug(e, "geometry-load")

        self.refresh_catalog()
        self.refresh_cart()

    # ---------- layout ----------
    def _build_catalog_panel(self) -> QWidget:
        box = QGroupBox("✨ Product Catalog")
        lay = QHBoxLayout(box)

        self.products = QListWidget()
        self.products.setStyleSheet(f"background:{LIST_BG};")
        self.products.currentRowChanged.connect(self.on_product_selected)
        lay.addWidget(self.products, 1)

        details = QGroupBox("📝 Product Details")
        dl = QVBoxLayout(details)
        top = QHBoxLayout()
        self.image = QLabel("Image")
        self.image.setAlignment(Qt.AlignCenter)
        self.image.setFixedSize(IMAGE_W + 30, IMAGE_H + 30)
        self.image.setStyleSheet(f"background:{LIST_BG};")
        self.details = QTextEdit()
        self.details.setReadOnly(True)
        top.addWidget(self.image)
        top.addWidget(self.details, 1)
        tw = QWidget(); tw.setLayout(top)
        dl.addWidget(tw, 1)

        ctl = QHBoxLayout()
        ctl.addWidget(QLabel("Quantity:"))
        self.quantity = QSpinBox()
        self.quantity.setRange(MIN_QUANTITY, MAX_QUANTITY)
        self.quantity.setValue(MIN_QUANTITY)
        ctl.addWidget(self.quantity)
        add_btn = QPushButton("Add to Cart"); add_btn.setStyleSheet(BTN_STYLE)
        add_btn.clicked.connect(self.on_add_to_cart)
        ctl.addWidget(add_btn)
        manage_btn = QPushButton("+ Manage Products")
        manage_btn.setToolTip("Click to Add/Delete New Products")
        manage_btn.clicked.connect(self.open_product_manager)
        ctl.addWidget(manage_btn)
        ctl.addStretch(1)
        cwid = QWidget(); cwid.setLayout(ctl)
        dl.addWidget(cwid)

        lay.addWidget(details, 2)
        return box

    def _build_cart_panel(self) -> QWidget:
        box = QGroupBox("🛍 Your Cart")
        lay = QVBoxLayout(box)

        self.cart_list = QListWidget()
        self.cart_list.setStyleSheet(f"background:{LIST_BG}; font-family: monospace;")
        lay.addWidget(self.cart_list, 1)

        remove_btn = QPushButton("Remove Item"); remove_btn.setStyleSheet(BTN_STYLE)
        remove_btn.clicked.connect(self.on_remove_item)
        clear_btn = QPushButton("Clear Cart"); clear_btn.setStyleSheet(BTN_STYLE)
        clear_btn.clicked.connect(self.on_clear_cart)
        self.count_label = QLabel("Items: 0")
        self.total_label = QLabel(f"Total: {fmt_money(0)}")
        checkout_btn = QPushButton("Checkout"); checkout_btn.setStyleSheet(CHECKOUT_STYLE)
        checkout_btn.clicked.connect(self.on_checkout)

        for w in (remove_btn, clear_btn, self.count_label, self.total_label, checkout_btn):
            lay.addWidget(w)
        return box

    # ---------- rendering ----------
    def refresh_catalog(self):
        previous = self._shown
        self.products.blockSignals(True)
        try:
            self.products.clear()
            for p in self.session.catalog:
                self.products.addItem(QListWidgetItem(str(p)))
        finally:
            self.products.blockSignals(False)
        # re-select by name; rows shift when the dialog adds or removes
        target = self.session.catalog.find(previous.name) if previous is not None else None
        row = next((i for i, p in enumerate(self.session.catalog) if p is target), -1)
        if row >= 0:
            self.products.setCurrentRow(row)
            self._show_product(target)
        else:
            self.products.setCurrentRow(-1)
            self._show_product(None)

    def refresh_cart(self):
        self.cart_list.clear()
        for item in self.session.cart:
            self.cart_list.addItem(QListWidgetItem(str(item)))
        self.total_label.setText(f"Total: {fmt_money(self.session.total_price())}")
        self.count_label.setText(f"Items: {self.session.item_count()}")

    def _show_product(self, p):
        self._shown = p
        if p is None:
            self.details.clear()
            self.image.setPixmap(QPixmap())
            self.image.setText("Image")
            return
        self.details.setText(product_details(p))
        path = resolve_image(p.image_url, APP_DIR)
        pix = QPixmap(path) if path else QPixmap()
        if pix.isNull():
            self.image.setPixmap(QPixmap())
            self.image.setText("Image not found")
        else:
            self.image.setText("")
            self.image.setPixmap(pix.scaled(IMAGE_W, IMAGE_H, Qt.KeepAspectRatio, Qt.SmoothTransformation))

    def _selected_product(self):
        row = self.products.currentRow()
        if 0 <= row < len(self.session.catalog):
            return self.session.catalog[row]
        return None

    # ---------- slots ----------
    def on_product_selected(self, _row: int):
        self._show_product(self._selected_product())

    def on_add_to_cart(self):
        p = self._selected_product()
        if p is None:
            return
        self.session.add_to_cart(p, parse_quantity(self.quantity.value()))
        self.refresh_cart()

    def on_remove_item(self):
        index = self.cart_list.currentRow()
        if index != -1:
            self.session.remove_cart_line(index)
            self.refresh_cart()

    def on_clear_cart(self):
        self.session.clear_cart()
        self.refresh_cart()

    def on_checkout(self):
        try:
            receipt = self.session.checkout()
        except EmptyCart as e:
            QMessageBox.information(self, "Checkout", str(e))
            return
        QMessageBox.information(self, "Checkout", receipt.message())
        _chronicle("checkout", [f"items={receipt.item_count}", f"total={receipt.total}"])
        self.refresh_cart()

    def open_product_manager(self):
        dlg = ProductManagerDialog(self, self.session, on_changed=self.refresh_catalog)
        dlg.exec()

    def closeEvent(self, ev):
        # [geometry-save]
        try:
            s = QSettings(APP_FRIENDLY_NAME, APP_FRIENDLY_NAME)
            s.setValue("main/geometry", self.saveGeometry())
        except Exception as e:
            lorekeeper.debug(e, "geometry-save")
        _chronicle("app_closing", [f"catalog={len(self.session.catalog)}",
                                   f"cart_items={self.session.item_count()}"])
        super().closeEvent(ev)


def main(argv=None) -> int:
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    try:
        session = open_session()
    except (OSError, KeyError, ValueError) as e:
        QMessageBox.critical(None, "Catalog failed to load", f"{type(e).__name__}: {e}")
        return 1
    stamp = datetime.datetime.now().strftime("SC-%Y%m%d-%H%M%S")
    _chronicle("app_started", ["ui initialized", f"build={stamp}",
                               f"catalog_version={session.catalog.version}"])
    w = Main(session)
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
