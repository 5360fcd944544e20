"""
Seed list of Norwegian postal codes.

A small selection around the largest cities; the full register is loaded
through the admin import endpoint.
"""

# (post place, municipality, county) -> postal codes
_SEED = [
    (('Oslo', 'Oslo', 'Oslo'), [
        '0001', '0010', '0015', '0020', '0030', '0040', '0050', '0080', '0101', '0102',
        '0103', '0104', '0105', '0106', '0107', '0110', '0111', '0112', '0113', '0114', '0115',
    ]),
    (('Bergen', 'Bergen', 'Vestland'), [
        '5003', '5006', '5007', '5008', '5009', '5010', '5011', '5012', '5013', '5014',
        '5015', '5018', '5020', '5021', '5022', '5023',
    ]),
    (('Trondheim', 'Trondheim', 'Trøndelag'), [
        '7003', '7004', '7005', '7006', '7007', '7008', '7009', '7010', '7011', '7012',
        '7013', '7014', '7018', '7020', '7021', '7022',
    ]),
    (('Stavanger', 'Stavanger', 'Rogaland'), [
        '4001', '4003', '4004', '4005', '4006', '4007', '4008', '4009', '4010', '4011',
        '4012', '4013', '4014', '4015', '4016', '4020',
    ]),
    (('Kristiansand', 'Kristiansand', 'Agder'), [
        '4601', '4602', '4603', '4604', '4605', '4606', '4607', '4608', '4609', '4610',
        '4611', '4612', '4613', '4614', '4615', '4616',
    ]),
    (('Tromsø', 'Tromsø', 'Troms og Finnmark'), [
        '9003', '9004', '9005', '9006', '9007', '9008', '9009', '9010', '9011', '9012',
        '9013', '9014', '9015', '9016', '9017', '9018',
    ]),
]

NORWEGIAN_POSTAL_CODES = [
    {
        'postal_code': code,
        'post_place': post_place,
        'municipality': municipality,
        'county': county,
    }
    for (post_place, municipality, county), codes in _SEED
    for code in codes
]
