"""
Project: Cafe POS
Date: October 2026

Description:
Sample café catalog used for demo data and seeding, plus lookup/filter
helpers that work on any list of products or customization options.
"""

from typing import Dict, Iterable, List, Optional

from schemas import CustomizationOption, Product

_IMG = "https://images.unsplash.com/photo-{}?w=500&h=350&fit=crop"

PRODUCT_CATEGORIES = ["กาแฟร้อน", "กาแฟเย็น", "ชา", "นมและช็อคโกแลต", "สมูทตี้", "ขนม"]

SAMPLE_PRODUCTS: List[Product] = [
    Product(id=1, name="เอสเปรสโซ่", category="กาแฟร้อน", price=45, image=_IMG.format("1514432324607-a09d9b4aefdd"), description="กาแฟเข้มข้น"),
    Product(id=2, name="คาปูชิโน่", category="กาแฟร้อน", price=55, image=_IMG.format("1509042239860-f550ce710b93"), description="กาแฟผสมนมสตีม"),
    Product(id=3, name="ลาเต้", category="กาแฟร้อน", price=55, image=_IMG.format("1497636577773-f1231844b336"), description="กาแฟผสมนม"),
    Product(id=4, name="อเมริกาโน่", category="กาแฟร้อน", price=45, image=_IMG.format("1572286258217-215cf8e064b9"), description="กาแฟผสมน้ำร้อน"),
    Product(id=5, name="มอคค่า", category="กาแฟร้อน", price=60, image=_IMG.format("1511920170033-f8396924c348"), description="กาแฟผสมช็อคโกแลต"),
    Product(id=6, name="ฮันนี่ลาเต้", category="กาแฟร้อน", price=65, image=_IMG.format("1579888944880-d98341245702"), description="กาแฟผสมนมและน้ำผึ้ง"),
    Product(id=7, name="เอสเปรสโซ่เย็น", category="กาแฟเย็น", price=55, image=_IMG.format("1517701604599-bb29b565090c"), description="กาแฟเข้มข้นเสิร์ฟเย็น"),
    Product(id=8, name="ลาเต้เย็น", category="กาแฟเย็น", price=65, image=_IMG.format("1570968915860-54d5c301fa9f"), description="กาแฟผสมนมเสิร์ฟเย็น"),
    Product(id=9, name="ชาเขียว", category="ชา", price=50, image=_IMG.format("1519811170192-85eadc19f786"), description="ชาเขียวญี่ปุ่น"),
    Product(id=10, name="ชาไทย", category="ชา", price=60, image=_IMG.format("1571934811356-5cc061b6821f"), description="ชาไทยดั้งเดิม"),
]

SAMPLE_CUSTOMIZATION_OPTIONS: List[CustomizationOption] = [
    CustomizationOption(id=1, name="ร้อน", type="type", price=0, is_default=True),
    CustomizationOption(id=2, name="เย็น", type="type", price=10),
    CustomizationOption(id=3, name="ไม่หวาน", type="sugar_level", price=0),
    CustomizationOption(id=4, name="น้อย", type="sugar_level", price=0),
    CustomizationOption(id=5, name="ปกติ", type="sugar_level", price=0, is_default=True),
    CustomizationOption(id=6, name="มาก", type="sugar_level", price=0),
    CustomizationOption(id=7, name="นมสด", type="milk_type", price=0, is_default=True),
    CustomizationOption(id=8, name="นมข้น", type="milk_type", price=0),
    CustomizationOption(id=9, name="นมอัลมอนด์", type="milk_type", price=15),
    CustomizationOption(id=10, name="วิปครีม", type="topping", price=10),
    CustomizationOption(id=11, name="ช็อกโกแลตชิพ", type="topping", price=10),
    CustomizationOption(id=12, name="คาราเมล", type="topping", price=15),
    CustomizationOption(id=13, name="บราวนี่", type="topping", price=20),
    CustomizationOption(id=14, name="เพิ่มช็อต", type="extra", price=15),
]


def get_products_by_category(category: str, products: Optional[Iterable[Product]] = None) -> List[Product]:
    """Active products in `category`, in catalog order."""
    products = SAMPLE_PRODUCTS if products is None else products
    return [p for p in products if p.category == category and p.active]


def get_customization_options_by_type(option_type: str, options: Optional[Iterable[CustomizationOption]] = None) -> List[CustomizationOption]:
    options = SAMPLE_CUSTOMIZATION_OPTIONS if options is None else options
    return [o for o in options if o.type == option_type]


def group_options_by_type(options: Optional[Iterable[CustomizationOption]] = None) -> Dict[str, List[CustomizationOption]]:
    options = SAMPLE_CUSTOMIZATION_OPTIONS if options is None else options
    grouped: Dict[str, List[CustomizationOption]] = {}
    for o in options:
        grouped.setdefault(o.type, []).append(o)
    return grouped


def find_product(product_id: int, products: Optional[Iterable[Product]] = None) -> Optional[Product]:
    products = SAMPLE_PRODUCTS if products is None else products
    return next((p for p in products if p.id == product_id), None)
