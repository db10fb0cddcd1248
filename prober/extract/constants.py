"""
Extraction constants: XPath cascades, sentinel values, fallback catalog paths.

Query order is significant for product ids (first hit wins) and for payment
methods (first-seen order of the result).
"""

from __future__ import annotations

import re

# Product ids -----------------------------------------------------------------

ADD_TO_CART_ANCHOR_QUERY = '//a[contains(@href, "add-to-cart=")]/@href'
ADD_TO_CART_INPUT_QUERY = '//input[@name="add-to-cart" or @name="product_id"]/@value'
PRODUCT_DATA_ATTRIBUTE_QUERY = (
    "//*[@data-product_id or @data-product-id]/@data-product_id"
    " | //*[@data-product_id or @data-product-id]/@data-product-id"
)
ADD_TO_CART_FORM_QUERY = '//form[contains(@action, "add-to-cart=")]/@action'
LD_JSON_SCRIPT_QUERY = '//script[@type="application/ld+json"]'

ADD_TO_CART_ID_PATTERN = re.compile(r"add-to-cart=(\d+)")

# Payment methods ---------------------------------------------------------------

# Progressively looser: #payment container, then any id containing "payment",
# then theme/plugin classes, then unscoped radio inputs.
PAYMENT_METHOD_QUERIES = (
    '//*[@id="payment"]//ul[contains(@class, "wc_payment_methods")]//input[@type="radio"]/@value',
    '//*[@id="payment"]//input[@type="radio" and @name="payment_method"]/@value',
    '//*[contains(@id, "payment")]//input[@type="radio" and @name="payment_method"]/@value',
    '//input[@type="radio" and @name="payment_method"]/@value',
    '//*[@id="payment"]//input[contains(@name, "payment") and @type="radio"]/@value',
    '//*[contains(@id, "payment")]//input[contains(@name, "payment") and @type="radio"]/@value',
    '//input[contains(@name, "payment") and @type="radio"]/@value',
    '//*[contains(@id, "payment")]//input[contains(@name, "method") and @type="radio"]/@value',
    '//*[contains(@class, "wc_payment_methods")]//input[@type="radio" and contains(@name, "payment")]/@value',
    '//*[@id="payment"]//div[contains(@class, "payment_method")]//input[@type="radio"]/@value',
    '//*[contains(@class, "woocommerce-checkout-payment")]//input[@type="radio" and @name]/@value',
    '//*[contains(@class, "woocommerce-payment-methods")]//input[@type="radio" and @name]/@value',
    '//input[@type="radio" and contains(@id, "payment_method")]/@value',
    '//input[@type="radio" and contains(@name, "payment")]/@value',
    '//input[@type="radio" and contains(@class, "payment")]/@value',
)

# Saved-card UI toggles ("use a new card", "save card"), not payment methods.
PAYMENT_METHOD_SENTINELS = frozenset({"new", "true"})

# CAPTCHA -------------------------------------------------------------------------

CAPTCHA_INDICATOR_QUERIES = (
    '//iframe[contains(@src, "recaptcha")]',
    '//div[contains(@class, "g-recaptcha")]',
    '//div[contains(@class, "h-captcha")]',
    '//script[contains(@src, "recaptcha")]',
    '//script[contains(@src, "hcaptcha")]',
    '//noscript[contains(text(), "captcha")]',
    '//input[@name="g-recaptcha-response"]',
    '//input[@name="h-captcha-response"]',
    '//div[@id="px-captcha"]',
    '//div[contains(@class, "captcha")]',
    '//input[contains(@id, "captcha")]',
    '//div[contains(@class, "cf-captcha-container")]',
    '//input[@type="hidden" and @name="cf-turnstile-response"]',
    '//input[@type="hidden" and @name="captcha"]',
)

# Fallback catalog crawl ------------------------------------------------------------

# Tried in order against the site origin when the home page yields no product id.
CATALOG_CANDIDATE_PATHS = (
    "/shop/",
    "/product-category/",
    "/category/",
    "/products/",
    "/store/",
    "/collections/",
    "/items/",
    "/catalog/",
    "/products-page/",
    "/product/",
    "/our-products/",
    "/shop-all/",
    "/shop-by-category/",
    "/all-products/",
    "/product-list/",
    "/sale/",
    "/new-arrivals/",
    "/top-rated/",
    "/best-sellers/",
    "/featured/",
    "/brands/",
    "/vendors/",
    "/promotions/",
    "/deals/",
    "/discounts/",
    "/offers/",
    "/collections/all/",
    "/our-range/",
    "/exclusive/",
    "/seasonal/",
    "/limited-edition/",
    "/special-edition/",
    "/catalogue/",
    "/shop-now/",
    "/shop-by-brand/",
    "/shop-by-type/",
    "/shop-by-price/",
    "/clearance/",
    "/outlet/",
    "/promo-items/",
)

# Cart / checkout ---------------------------------------------------------------------

AJAX_ADD_TO_CART_PATH = "/?wc-ajax=add_to_cart"
CHECKOUT_PATH = "/checkout/"
# Substring an AJAX add-to-cart response must contain to be taken as accepted.
CART_RESPONSE_MARKER = "cart"
