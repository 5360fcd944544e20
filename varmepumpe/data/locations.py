"""
Norwegian counties (fylker) and their municipalities (kommuner).

Static reference data for dropdowns and validation hints. Names are matched
exactly as written here; no case or diacritic folding is applied.
"""

COUNTIES = {
    "Akershus": [
        "Asker",
        "Bærum",
        "Eidsvoll",
        "Enebakk",
        "Frogn",
        "Gjerdrum",
        "Hurdal",
        "Lillestrøm",
        "Lunner",
        "Nannestad",
        "Nes",
        "Nesodden",
        "Nittedal",
        "Nordre Follo",
        "Rælingen",
        "Ullensaker",
        "Vestby",
        "Ås",
    ],
    "Buskerud": [
        "Drammen",
        "Flesberg",
        "Flå",
        "Gol",
        "Hemsedal",
        "Hol",
        "Hole",
        "Kongsberg",
        "Krødsherad",
        "Modum",
        "Nesbyen",
        "Nore og Uvdal",
        "Ringerike",
        "Rollag",
        "Sigdal",
        "Ål",
    ],
    "Innlandet": [
        "Alvdal",
        "Dovre",
        "Eidskog",
        "Elverum",
        "Engerdal",
        "Etnedal",
        "Folldal",
        "Gausdal",
        "Gjøvik",
        "Gran",
        "Grue",
        "Hamar",
        "Kongsvinger",
        "Lesja",
        "Lillehammer",
        "Lom",
        "Løten",
        "Nord-Aurdal",
        "Nord-Fron",
        "Nord-Odal",
        "Nordre Land",
        "Os",
        "Rendalen",
        "Ringebu",
        "Ringsaker",
        "Sel",
        "Skjåk",
        "Stange",
        "Stor-Elvdal",
        "Søndre Land",
        "Sør-Aurdal",
        "Sør-Fron",
        "Sør-Odal",
        "Tolga",
        "Trysil",
        "Tynset",
        "Vang",
        "Vestre Slidre",
        "Vestre Toten",
        "Vågå",
        "Våler",
        "Østre Toten",
        "Øyer",
        "Øystre Slidre",
    ],
    "Oslo": [
        "Oslo",
    ],
    "Vestfold": [
        "Færder",
        "Horten",
        "Holmestrand",
        "Larvik",
        "Sandefjord",
        "Tønsberg",
    ],
    "Telemark": [
        "Bamble",
        "Drangedal",
        "Fyresdal",
        "Hjartdal",
        "Kragerø",
        "Kviteseid",
        "Midt-Telemark",
        "Nissedal",
        "Nome",
        "Notodden",
        "Porsgrunn",
        "Seljord",
        "Siljan",
        "Skien",
        "Tinn",
        "Tokke",
        "Vinje",
    ],
    "Agder": [
        "Arendal",
        "Birkenes",
        "Bygland",
        "Bykle",
        "Evje og Hornnes",
        "Farsund",
        "Flekkefjord",
        "Froland",
        "Gjerstad",
        "Grimstad",
        "Iveland",
        "Kristiansand",
        "Kvinesdal",
        "Lillesand",
        "Lindesnes",
        "Lyngdal",
        "Mandal",
        "Risør",
        "Sirdal",
        "Tvedestrand",
        "Valle",
        "Vegårshei",
        "Vennesla",
        "Åseral",
    ],
    "Rogaland": [
        "Bokn",
        "Eigersund",
        "Gjesdal",
        "Haugesund",
        "Hjelmeland",
        "Hå",
        "Karmøy",
        "Klepp",
        "Kvitsøy",
        "Lund",
        "Randaberg",
        "Rennesøy",
        "Riska",
        "Sandnes",
        "Sauda",
        "Sokndal",
        "Sola",
        "Stavanger",
        "Strand",
        "Suldal",
        "Time",
        "Tysvær",
        "Utsira",
    ],
    "Vestland": [
        "Alver",
        "Askøy",
        "Aurland",
        "Austevoll",
        "Bergen",
        "Bjørnafjorden",
        "Bremanger",
        "Etne",
        "Fedje",
        "Fitjar",
        "Fjaler",
        "Flåm",
        "Kvinnherad",
        "Kvam",
        "Kinn",
        "Lærdal",
        "Luster",
        "Masfjorden",
        "Modalen",
        "Osterøy",
        "Sogndal",
        "Solund",
        "Stad",
        "Stord",
        "Stryn",
        "Sunnfjord",
        "Sveio",
        "Tysnes",
        "Ullensvang",
        "Ulvik",
        "Vaksdal",
        "Voss",
        "Øygarden",
    ],
    "Møre og Romsdal": [
        "Aukra",
        "Averøy",
        "Fjord",
        "Hustadvika",
        "Kristiansund",
        "Molde",
        "Rauma",
        "Sande",
        "Smøla",
        "Stranda",
        "Sula",
        "Sunndal",
        "Surnadal",
        "Sykkylven",
        "Tingvoll",
        "Ulstein",
        "Vanylven",
        "Vestnes",
        "Volda",
        "Ørskog",
        "Ørsta",
        "Ålesund",
    ],
    "Trøndelag": [
        "Flatanger",
        "Frøya",
        "Grong",
        "Hitra",
        "Høylandet",
        "Indre Fosen",
        "Inderøy",
        "Klæbu",
        "Leka",
        "Levanger",
        "Lierne",
        "Malvik",
        "Melhus",
        "Meråker",
        "Midtre Gauldal",
        "Namsos",
        "Namsskogan",
        "Nærøysund",
        "Oppdal",
        "Orkland",
        "Osen",
        "Overhalla",
        "Rennebu",
        "Rindal",
        "Røros",
        "Selbu",
        "Skaun",
        "Snåsa",
        "Steinkjer",
        "Stjørdal",
        "Trondheim",
        "Tydal",
        "Verdal",
        "Ørland",
    ],
    "Nordland": [
        "Alstahaug",
        "Andøy",
        "Beiarn",
        "Bindal",
        "Bodø",
        "Brønnøy",
        "Bø",
        "Dønna",
        "Evenes",
        "Fauske",
        "Flakstad",
        "Gildeskål",
        "Grane",
        "Hadsel",
        "Hamarøy",
        "Hattfjelldal",
        "Hemnes",
        "Herøy",
        "Leirfjord",
        "Lurøy",
        "Lødingen",
        "Meløy",
        "Moskenes",
        "Narvik",
        "Nesna",
        "Rana",
        "Rødøy",
        "Røst",
        "Saltdal",
        "Sømna",
        "Sortland",
        "Steigen",
        "Sørfold",
        "Tjeldsund",
        "Træna",
        "Tysfjord",
        "Værøy",
        "Vefsn",
        "Vega",
        "Vestvågøy",
        "Vevelstad",
        "Øksnes",
    ],
    "Troms og Finnmark": [
        "Alta",
        "Berlevåg",
        "Båtsfjord",
        "Deatnu",
        "Gamvik",
        "Guovdageaidnu",
        "Hammerfest",
        "Hasvik",
        "Ibestad",
        "Kárášjohka",
        "Kvænangen",
        "Kvæfjord",
        "Lebesby",
        "Loppa",
        "Lyngen",
        "Måsøy",
        "Nordkapp",
        "Nordreisa",
        "Porsanger",
        "Senja",
        "Sør-Varanger",
        "Storfjord",
        "Tromsø",
        "Unjárga",
        "Vadsø",
        "Vardø",
    ],
}


def get_all_counties():
    """County names in reference order"""
    return list(COUNTIES)


def get_municipalities_by_county(county):
    """Municipalities of a county, empty for an unknown county"""
    return list(COUNTIES.get(county, []))


def get_all_municipalities():
    return [m for municipalities in COUNTIES.values() for m in municipalities]


def get_county_by_municipality(municipality):
    """County a municipality belongs to, or None when unknown"""
    for county, municipalities in COUNTIES.items():
        if municipality in municipalities:
            return county
    return None
