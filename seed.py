# Documents written when the data directory is first created

DEFAULT_SETTINGS: dict = {
    "currency": {"code": "EUR", "symbol": "€", "name": "Euro"},
    "business": {"name": "SOLEA", "freeShippingThreshold": 50, "shippingCost": 5.99},
    "contact": {
        "phone": "+33 1 23 45 67 89",
        "email": "contact@solea.fr",
        "whatsapp": "+33612345678",
        "address": "12 rue des Lilas, 75011 Paris",
    },
    "admin": {"username": "admin", "password": "changeme"},
}

# Demo catalog: hair care products
SEED_PRODUCTS: list = [
    {
        "id": "shampoing-hydratant-argan",
        "name": "Shampoing Hydratant à l'Argan",
        "description": "Shampoing doux qui nourrit les cheveux secs.",
        "longDescription": "Enrichi en huile d'argan bio, ce shampoing nettoie en douceur tout en hydratant les longueurs.",
        "price": 18.9,
        "category": "shampoo",
        "hairType": ["dry", "curly"],
        "special": ["bestseller", "bio"],
        "sku": "SOL-SH-001",
        "rating": 5,
        "reviewCount": 128,
        "images": ["images/products/shampoing-argan.jpg"],
        "variants": [{"name": "250ml", "price": 18.9}, {"name": "500ml", "price": 32.0}],
        "benefits": ["Hydratation intense", "Brillance"],
        "ingredients": "Aqua, Sodium Coco-Sulfate, Argania Spinosa Kernel Oil",
        "certifications": ["Cosmos Organic"],
        "stock": 40,
        "visible": True,
    },
    {
        "id": "masque-reparateur-karite",
        "name": "Masque Réparateur au Karité",
        "description": "Soin profond pour cheveux abîmés.",
        "longDescription": "Un masque riche au beurre de karité qui répare la fibre capillaire.",
        "price": 24.5,
        "category": "mask",
        "hairType": ["damaged", "dry"],
        "special": ["new"],
        "sku": "SOL-MA-001",
        "rating": 4,
        "reviewCount": 57,
        "images": ["images/products/masque-karite.jpg"],
        "variants": [],
        "benefits": ["Réparation", "Douceur"],
        "ingredients": "Aqua, Butyrospermum Parkii Butter, Cetearyl Alcohol",
        "certifications": [],
        "stock": 25,
        "visible": True,
    },
    {
        "id": "huile-seche-jojoba",
        "name": "Huile Sèche Jojoba",
        "description": "Huile légère pour tous types de cheveux.",
        "longDescription": "Une huile sèche non grasse qui protège les pointes et apporte de l'éclat.",
        "price": 21.0,
        "category": "oil",
        "hairType": ["normal", "fine", "curly"],
        "special": ["bio"],
        "sku": "SOL-HU-001",
        "rating": 5,
        "reviewCount": 93,
        "images": ["images/products/huile-jojoba.jpg"],
        "variants": [],
        "benefits": ["Éclat", "Protection des pointes"],
        "ingredients": "Simmondsia Chinensis Seed Oil, Tocopherol",
        "certifications": ["Ecocert"],
        "stock": 60,
        "visible": True,
    },
    {
        "id": "apres-shampoing-lin",
        "name": "Après-shampoing Démêlant au Lin",
        "description": "Démêle et apporte du volume aux cheveux fins.",
        "longDescription": "Formule légère aux graines de lin pour des cheveux souples sans alourdir.",
        "price": 16.5,
        "category": "conditioner",
        "hairType": ["fine", "normal"],
        "special": [],
        "sku": "SOL-AS-001",
        "rating": 4,
        "reviewCount": 31,
        "images": ["images/placeholder.jpg"],
        "variants": [],
        "benefits": ["Démêlage", "Volume"],
        "ingredients": "Aqua, Linum Usitatissimum Seed Extract",
        "certifications": [],
        "stock": 0,
        "visible": False,
    },
]
