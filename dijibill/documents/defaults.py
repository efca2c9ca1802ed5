"""
DijiBill Documents - Built-in Default Templates
=================================================
Templates used when no effective stored template exists for a
category/type.

All built-ins use only the directive set the renderer understands, and the
field names the context builder produces for orders, invoices, quotes and
POS reports. QR blocks are guarded by {{#includeQR}} so a document
composed without compliance fields renders no image.
"""

from __future__ import annotations

from typing import Optional

from dijibill.documents.models import (
    CATEGORY_INVOICE,
    CATEGORY_QUOTE,
    CATEGORY_RECEIPT,
    CATEGORY_REPORT,
    TYPE_ARABIC,
    TYPE_ARABIC_THERMAL,
    TYPE_ENGLISH,
    TYPE_ENGLISH_A4,
    TYPE_ENGLISH_THERMAL,
    TYPE_THERMAL,
    DocumentTemplate,
    is_arabic_type,
)


# ---------------------------------------------------------------------------
# Shared fragments
# ---------------------------------------------------------------------------

_QR_BLOCK = """\
{{#includeQR}}
<div class="qr">
  <img src="{{qrCodeUrl}}" alt="ZATCA QR Code" width="150" height="150" />
</div>
{{/includeQR}}
"""

_QR_BLOCK_AR = """\
{{#includeQR}}
<div class="qr">
  <img src="{{qrCodeUrl}}" alt="رمز الاستجابة السريعة" width="150" height="150" />
</div>
{{/includeQR}}
"""


# ---------------------------------------------------------------------------
# Receipts
# ---------------------------------------------------------------------------

RECEIPT_ENGLISH_THERMAL = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Receipt</title>
<style>
  body { font-family: monospace; font-size: 12px; margin: 0; }
  p, h2 { margin: 0; }
  .center { text-align: center; }
  .line { display: flex; justify-content: space-between; }
  .total { font-weight: bold; border-top: 1px solid #000; margin-top: 6px; }
  .qr { text-align: center; margin-top: 10px; }
  table { width: 100%; border-collapse: collapse; }
  th { text-align: left; border-bottom: 1px solid #000; }
  .num { text-align: right; }
</style>
</head>
<body>
{{#customHeader}}<div class="center"><strong>{{customHeader}}</strong></div>{{/customHeader}}
<div class="center">
  {{#companyLogo}}<img src="{{companyLogo}}" alt="Logo" style="max-width: 98%;" />{{/companyLogo}}
  <h2>{{companyName}}</h2>
  <p>{{companyAddress}}</p>
  <p>Tel: {{companyPhone}}</p>
  {{#companyVat}}<p>VAT: {{companyVat}}</p>{{/companyVat}}
</div>
<hr>
<p>Order #: {{orderNumber}}</p>
{{#queueNumber}}<p>Queue #: {{queueNumber}}</p>{{/queueNumber}}
<p>Type: {{orderType}}</p>
<p>Date: {{orderDate}}</p>
{{#tableName}}<p>Table: {{tableName}}</p>{{/tableName}}
{{#customerName}}<p>Customer: {{customerName}}</p>{{/customerName}}
{{#createdByName}}<p>Served by: {{createdByName}}</p>{{/createdByName}}
<hr>
<table>
  <thead><tr><th>Item</th><th>Qty</th><th class="num">Amount</th></tr></thead>
  <tbody>
{{#each items}}    <tr><td>{{name}}</td><td>{{quantity}}</td><td class="num">{{lineTotal}}</td></tr>
{{/each}}  </tbody>
</table>
<div class="total">
  <div class="line"><span>Total Qty:</span><span>{{totalQty}}</span></div>
  <div class="line"><span>Items Value:</span><span>{{subtotal}}</span></div>
  <div class="line"><span>VAT ({{vatRate}}%):</span><span>{{vatAmount}}</span></div>
  <div class="line"><span>TOTAL:</span><span>{{total}}</span></div>
</div>
{{#payments}}
<table>
  <thead><tr><th>Payment</th><th class="num">Amount</th></tr></thead>
  <tbody>
{{#each payments}}    <tr><td>{{paymentType}}</td><td class="num">{{amount}}</td></tr>
{{/each}}  </tbody>
</table>
{{/payments}}
{{#customFooter}}<div class="center"><em>{{customFooter}}</em></div>{{/customFooter}}
""" + _QR_BLOCK + """\
</body>
</html>
"""

RECEIPT_ARABIC_THERMAL = """\
<!DOCTYPE html>
<html dir="rtl" lang="ar">
<head>
<meta charset="utf-8">
<title>إيصال</title>
<style>
  body { font-family: Tahoma, Arial, sans-serif; font-size: 12px; margin: 0; direction: rtl; }
  p, h2 { margin: 0; }
  .center { text-align: center; }
  .line { display: flex; justify-content: space-between; }
  .total { font-weight: bold; border-top: 1px solid #000; margin-top: 6px; }
  .qr { text-align: center; margin-top: 10px; }
  table { width: 100%; border-collapse: collapse; }
  th { text-align: right; border-bottom: 1px solid #000; }
  .num { text-align: left; }
</style>
</head>
<body>
<div class="center">
  {{#companyLogo}}<img src="{{companyLogo}}" alt="شعار الشركة" style="max-width: 95%;" />{{/companyLogo}}
  <h2>{{companyName}}</h2>
  {{#companyNameAr}}<h2>{{companyNameAr}}</h2>{{/companyNameAr}}
  <p>العنوان: {{companyAddress}}</p>
  <p>الهاتف: {{companyPhone}}</p>
  {{#companyVat}}<p>الرقم الضريبي: {{companyVat}}</p>{{/companyVat}}
</div>
<hr>
{{#customHeader}}<div class="center"><strong>{{customHeader}}</strong></div><hr>{{/customHeader}}
<p>طلب #: {{orderNumber}}</p>
{{#queueNumber}}<p>رقم الدور: {{queueNumber}}</p>{{/queueNumber}}
<p>النوع: {{orderType}}</p>
<p>التاريخ: {{orderDate}}</p>
{{#tableName}}<p>الطاولة: {{tableName}}</p>{{/tableName}}
{{#customerName}}<p>العميل: {{customerName}}</p>{{/customerName}}
{{#createdByName}}<p>خدم من قبل: {{createdByName}}</p>{{/createdByName}}
<hr>
<table>
  <thead><tr><th>الصنف</th><th>الكمية</th><th class="num">المبلغ</th></tr></thead>
  <tbody>
{{#each items}}    <tr><td>{{name}}{{#this.nameAr}}<br>{{nameAr}}{{/this.nameAr}}</td><td>{{quantity}}</td><td class="num">{{lineTotal}}</td></tr>
{{/each}}  </tbody>
</table>
<div class="total">
  <div class="line"><span>إجمالي الكمية</span><span>{{totalQty}}</span></div>
  <div class="line"><span>المجموع الفرعي</span><span>{{subtotal}}</span></div>
  <div class="line"><span>ضريبة القيمة المضافة ({{vatRate}}%)</span><span>{{vatAmount}}</span></div>
  <div class="line"><span>الإجمالي</span><span>{{total}}</span></div>
</div>
{{#payments}}
<table>
  <thead><tr><th>طريقة الدفع</th><th class="num">المبلغ</th></tr></thead>
  <tbody>
{{#each payments}}    <tr><td>{{paymentType}}</td><td class="num">{{amount}}</td></tr>
{{/each}}  </tbody>
</table>
{{/payments}}
{{#customFooter}}<div class="center"><em>{{customFooter}}</em></div>{{/customFooter}}
""" + _QR_BLOCK_AR + """\
</body>
</html>
"""

RECEIPT_ENGLISH_A4 = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Receipt</title>
<style>
  body { font-family: Arial, sans-serif; font-size: 13px; }
  .header { display: flex; justify-content: space-between; border-bottom: 2px solid #000; }
  .qr { text-align: right; margin-top: 20px; }
  table { width: 100%; border-collapse: collapse; margin-top: 12px; }
  th, td { border: 1px solid #ccc; padding: 4px 6px; text-align: left; }
  .num { text-align: right; }
  .totals td { border: none; }
</style>
</head>
<body>
<div class="header">
  <div>
    {{#companyLogo}}<img src="{{companyLogo}}" alt="Logo" style="max-height: 80px;" />{{/companyLogo}}
    <h2>{{companyName}}</h2>
    <p>{{companyAddress}}<br>Tel: {{companyPhone}}{{#companyVat}}<br>VAT: {{companyVat}}{{/companyVat}}</p>
  </div>
  <div>
    <p>Receipt #: {{orderNumber}}<br>Date: {{orderDate}}<br>Type: {{orderType}}</p>
    {{#customerName}}<p>Customer: {{customerName}}</p>{{/customerName}}
  </div>
</div>
<table>
  <thead><tr><th>#</th><th>Item</th><th class="num">Qty</th><th class="num">Price</th><th class="num">Amount</th></tr></thead>
  <tbody>
{{#each items}}    <tr><td>{{@index}}</td><td>{{name}}</td><td class="num">{{quantity}}</td><td class="num">{{price}}</td><td class="num">{{lineTotal}}</td></tr>
{{/each}}  </tbody>
</table>
<table class="totals">
  <tr><td>Subtotal</td><td class="num">{{subtotal}}</td></tr>
  <tr><td>VAT ({{vatRate}}%)</td><td class="num">{{vatAmount}}</td></tr>
  <tr><td><strong>Total</strong></td><td class="num"><strong>{{total}}</strong></td></tr>
</table>
{{#customFooter}}<p><em>{{customFooter}}</em></p>{{/customFooter}}
""" + _QR_BLOCK + """\
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Invoices and quotes
# ---------------------------------------------------------------------------

INVOICE_ENGLISH = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Tax Invoice</title>
<style>
  body { font-family: Arial, sans-serif; font-size: 13px; }
  h1 { text-align: center; }
  .parties { display: flex; justify-content: space-between; }
  .qr { text-align: right; margin-top: 20px; }
  table { width: 100%; border-collapse: collapse; margin-top: 12px; }
  th, td { border: 1px solid #ccc; padding: 4px 6px; text-align: left; }
  .num { text-align: right; }
</style>
</head>
<body>
<h1>Tax Invoice</h1>
<div class="parties">
  <div>
    {{#companyLogo}}<img src="{{companyLogo}}" alt="Logo" style="max-height: 80px;" />{{/companyLogo}}
    <h3>{{companyName}}</h3>
    <p>{{companyAddress}}<br>Tel: {{companyPhone}}<br>VAT: {{companyVat}}</p>
  </div>
  <div>
    <p>Invoice #: {{invoiceNumber}}<br>Date: {{invoiceDate}}{{#dueDate}}<br>Due: {{dueDate}}{{/dueDate}}</p>
    <p>Bill to: {{customerName}}{{#customerVat}}<br>VAT: {{customerVat}}{{/customerVat}}</p>
  </div>
</div>
<table>
  <thead><tr><th>#</th><th>Description</th><th class="num">Qty</th><th class="num">Rate</th><th class="num">VAT</th><th class="num">Amount</th></tr></thead>
  <tbody>
{{#each items}}    <tr><td>{{@index}}</td><td>{{name}}{{#this.description}}<br><small>{{description}}</small>{{/this.description}}</td><td class="num">{{quantity}}</td><td class="num">{{rate}}</td><td class="num">{{vatAmount}}</td><td class="num">{{total}}</td></tr>
{{/each}}  </tbody>
</table>
<table>
  <tr><td>Subtotal</td><td class="num">{{subtotal}}</td></tr>
  {{#discount}}<tr><td>Discount</td><td class="num">{{discount}}</td></tr>{{/discount}}
  <tr><td>VAT ({{vatRate}}%)</td><td class="num">{{vatAmount}}</td></tr>
  <tr><td><strong>Total</strong></td><td class="num"><strong>{{total}}</strong></td></tr>
</table>
{{#notes}}<p>Notes: {{notes}}</p>{{/notes}}
{{#terms}}<p>Terms: {{terms}}</p>{{/terms}}
""" + _QR_BLOCK + """\
</body>
</html>
"""

INVOICE_ARABIC = """\
<!DOCTYPE html>
<html dir="rtl" lang="ar">
<head>
<meta charset="utf-8">
<title>فاتورة ضريبية</title>
<style>
  body { font-family: Tahoma, Arial, sans-serif; font-size: 13px; direction: rtl; }
  h1 { text-align: center; }
  .parties { display: flex; justify-content: space-between; }
  .qr { text-align: left; margin-top: 20px; }
  table { width: 100%; border-collapse: collapse; margin-top: 12px; }
  th, td { border: 1px solid #ccc; padding: 4px 6px; text-align: right; }
  .num { text-align: left; }
</style>
</head>
<body>
<h1>فاتورة ضريبية</h1>
<div class="parties">
  <div>
    {{#companyLogo}}<img src="{{companyLogo}}" alt="شعار الشركة" style="max-height: 80px;" />{{/companyLogo}}
    <h3>{{companyName}}</h3>
    {{#companyNameAr}}<h3>{{companyNameAr}}</h3>{{/companyNameAr}}
    <p>العنوان: {{companyAddress}}<br>الهاتف: {{companyPhone}}<br>الرقم الضريبي: {{companyVat}}</p>
  </div>
  <div>
    <p>رقم الفاتورة: {{invoiceNumber}}<br>التاريخ: {{invoiceDate}}{{#dueDate}}<br>تاريخ الاستحقاق: {{dueDate}}{{/dueDate}}</p>
    <p>العميل: {{customerName}}{{#customerVat}}<br>الرقم الضريبي: {{customerVat}}{{/customerVat}}</p>
  </div>
</div>
<table>
  <thead><tr><th>#</th><th>الوصف</th><th class="num">الكمية</th><th class="num">السعر</th><th class="num">الضريبة</th><th class="num">المبلغ</th></tr></thead>
  <tbody>
{{#each items}}    <tr><td>{{@index}}</td><td>{{name}}{{#this.description}}<br><small>{{description}}</small>{{/this.description}}</td><td class="num">{{quantity}}</td><td class="num">{{rate}}</td><td class="num">{{vatAmount}}</td><td class="num">{{total}}</td></tr>
{{/each}}  </tbody>
</table>
<table>
  <tr><td>المجموع الفرعي</td><td class="num">{{subtotal}}</td></tr>
  {{#discount}}<tr><td>الخصم</td><td class="num">{{discount}}</td></tr>{{/discount}}
  <tr><td>ضريبة القيمة المضافة ({{vatRate}}%)</td><td class="num">{{vatAmount}}</td></tr>
  <tr><td><strong>الإجمالي</strong></td><td class="num"><strong>{{total}}</strong></td></tr>
</table>
{{#notes}}<p>ملاحظات: {{notes}}</p>{{/notes}}
""" + _QR_BLOCK_AR + """\
</body>
</html>
"""

QUOTE_ENGLISH = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Quotation</title>
<style>
  body { font-family: Arial, sans-serif; font-size: 13px; }
  h1 { text-align: center; }
  table { width: 100%; border-collapse: collapse; margin-top: 12px; }
  th, td { border: 1px solid #ccc; padding: 4px 6px; text-align: left; }
  .num { text-align: right; }
</style>
</head>
<body>
<h1>Quotation</h1>
<h3>{{companyName}}</h3>
<p>{{companyAddress}}<br>Tel: {{companyPhone}}{{#companyVat}}<br>VAT: {{companyVat}}{{/companyVat}}</p>
<p>Quote #: {{quoteNumber}}<br>Date: {{quoteDate}}{{#validUntil}}<br>Valid until: {{validUntil}}{{/validUntil}}</p>
<p>Prepared for: {{customerName}}</p>
<table>
  <thead><tr><th>#</th><th>Item</th><th class="num">Qty</th><th class="num">Rate</th><th class="num">Amount</th></tr></thead>
  <tbody>
{{#each items}}    <tr><td>{{@index}}</td><td>{{name}}{{#this.description}}<br><small>{{description}}</small>{{/this.description}}</td><td class="num">{{quantity}}</td><td class="num">{{rate}}</td><td class="num">{{total}}</td></tr>
{{/each}}  </tbody>
</table>
<table>
  <tr><td>Subtotal</td><td class="num">{{subtotal}}</td></tr>
  <tr><td>VAT ({{vatRate}}%)</td><td class="num">{{vatAmount}}</td></tr>
  <tr><td><strong>Total</strong></td><td class="num"><strong>{{total}}</strong></td></tr>
</table>
{{#notes}}<p>Notes: {{notes}}</p>{{/notes}}
{{#terms}}<p>Terms: {{terms}}</p>{{/terms}}
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

REPORT_THERMAL = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{title}}</title>
<style>
  body { font-family: monospace; font-size: 10px; margin: 0; }
  h1 { font-size: 12px; text-align: center; }
  h2 { font-size: 11px; border-bottom: 1px solid #eee; }
  table { width: 100%; border-collapse: collapse; }
  td { padding: 2px; }
  .num { text-align: right; }
</style>
</head>
<body>
<h1>{{title}}</h1>
<table>
  <tr><td>Total Sales</td><td class="num">{{totalSales}}</td></tr>
  <tr><td>Total Orders</td><td class="num">{{totalOrders}}</td></tr>
  <tr><td>Items Sold</td><td class="num">{{totalItemsSold}}</td></tr>
  <tr><td>Avg. Order Value</td><td class="num">{{averageOrderValue}}</td></tr>
</table>
{{#if isDetailed}}
<h2>Sales by Payment Type</h2>
<table>
{{#each salesByPaymentType}}  <tr><td>{{@key}}</td><td class="num">{{this}}</td></tr>
{{/each}}</table>
<h2>Sales by Order Type</h2>
<table>
{{#each salesByOrderType}}  <tr><td>{{@key}}</td><td class="num">{{this}}</td></tr>
{{/each}}</table>
<h2>Top Selling Items</h2>
<table>
{{#each topSellingItems}}  <tr><td>{{this.name}}</td><td class="num">{{this.quantity}}</td><td class="num">{{this.total}}</td></tr>
{{/each}}</table>
<h2>Orders by Status</h2>
<table>
{{#each ordersByStatus}}  <tr><td>{{@key}}</td><td class="num">{{this}}</td></tr>
{{/each}}</table>
{{/if}}
<h2>Financial Summary</h2>
<table>
  <tr><td>Subtotal (before VAT)</td><td class="num">{{totalSubtotal}}</td></tr>
  <tr><td>Total VAT Collected</td><td class="num">{{totalTax}}</td></tr>
  <tr><td><strong>Total Sales</strong></td><td class="num"><strong>{{totalSales}}</strong></td></tr>
</table>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATES = {
    (CATEGORY_RECEIPT, TYPE_ENGLISH_THERMAL): RECEIPT_ENGLISH_THERMAL,
    (CATEGORY_RECEIPT, TYPE_ARABIC_THERMAL): RECEIPT_ARABIC_THERMAL,
    (CATEGORY_RECEIPT, TYPE_ENGLISH_A4): RECEIPT_ENGLISH_A4,
    (CATEGORY_INVOICE, TYPE_ENGLISH): INVOICE_ENGLISH,
    (CATEGORY_INVOICE, TYPE_ARABIC): INVOICE_ARABIC,
    (CATEGORY_QUOTE, TYPE_ENGLISH): QUOTE_ENGLISH,
    (CATEGORY_REPORT, TYPE_THERMAL): REPORT_THERMAL,
}

# Built-in type used when a category is asked for a type it has no
# default for (custom, a4, ...).
DEFAULT_TYPE_BY_CATEGORY = {
    CATEGORY_RECEIPT: TYPE_ENGLISH_THERMAL,
    CATEGORY_INVOICE: TYPE_ENGLISH,
    CATEGORY_QUOTE: TYPE_ENGLISH,
    CATEGORY_REPORT: TYPE_THERMAL,
}

ARABIC_TYPE_BY_CATEGORY = {
    CATEGORY_RECEIPT: TYPE_ARABIC_THERMAL,
    CATEGORY_INVOICE: TYPE_ARABIC,
}


def default_type_for(category: str, template_type: Optional[str] = None) -> Optional[str]:
    """
    Built-in template type that serves (category, template_type).

    Exact match first, then the category's Arabic default for Arabic
    types, then the category's general default.
    """
    if category not in DEFAULT_TYPE_BY_CATEGORY:
        return None
    if template_type is not None and (category, template_type) in DEFAULT_TEMPLATES:
        return template_type
    if is_arabic_type(template_type) and category in ARABIC_TYPE_BY_CATEGORY:
        return ARABIC_TYPE_BY_CATEGORY[category]
    return DEFAULT_TYPE_BY_CATEGORY[category]


def get_default_content(category: str, template_type: Optional[str] = None) -> Optional[str]:
    resolved_type = default_type_for(category, template_type)
    if resolved_type is None:
        return None
    return DEFAULT_TEMPLATES[(category, resolved_type)]


def build_default_template(
    category: str,
    template_type: Optional[str] = None,
) -> Optional[DocumentTemplate]:
    resolved_type = default_type_for(category, template_type)
    if resolved_type is None:
        return None

    return DocumentTemplate(
        template_id=f"default.{category}.{resolved_type}",
        name=f"Default {category} ({resolved_type})",
        category=category,
        template_type=resolved_type,
        content=DEFAULT_TEMPLATES[(category, resolved_type)],
        is_default=True,
        organization_id=None,
    )
