"""
Built-in content for the public pages.

Used whenever the database has nothing to show: empty tables, a missing
content key, or a JSON value that does not parse.
"""
from urllib.parse import quote

WHATSAPP_NUMBER = '5594992775857'

HERO = {
    'hero_label': 'Agendamento Online',
    'hero_title': 'Sua saúde em boas mãos',
    'hero_subtitle': (
        'Saúde, bem-estar e day clinic. Atendimento humanizado, tecnologia de '
        'última geração e os melhores especialistas.'
    ),
}

HERO_FEATURES = [
    'Resultado em até 24h',
    'Atendimento humanizado',
    'Tecnologia de ponta',
]

STATS = [
    {'label': 'Pacientes atendidos', 'value': '50.000+'},
    {'label': 'Anos de experiência', 'value': '15+'},
    {'label': 'Tempo médio de espera', 'value': '< 15min'},
]

CONTACT = {
    'contact_address': 'Av. Paulista, 1000 - Bela Vista, São Paulo - SP, CEP 01310-100',
    'contact_phone': '(11) 9999-9999',
    'contact_email': 'contato@grupounique.com.br',
    'contact_hours': 'Segunda a Sexta: 7h às 19h | Sábado: 7h às 13h',
}

GALLERY_TEXT = {
    'gallery_label': 'Nossa Estrutura',
    'gallery_title': 'Conheça nosso espaço',
    'gallery_subtitle': 'Um ambiente pensado para o seu conforto e bem-estar, com infraestrutura completa.',
}

GALLERY_SPACES = [
    {'label': 'Recepção', 'description': 'Ambiente amplo e acolhedor', 'span': 'wide'},
    {'label': 'Consultório', 'description': 'Equipamentos modernos', 'span': 'normal'},
    {'label': 'Laboratório', 'description': 'Resultados em até 24h', 'span': 'normal'},
    {'label': 'Sala de Espera', 'description': 'Conforto e tranquilidade', 'span': 'normal'},
    {'label': 'Centro de Diagnóstico', 'description': 'Tecnologia de ponta', 'span': 'wide'},
]

FAQS = [
    {
        'question': 'Como faço para agendar uma consulta?',
        'answer': (
            'Você pode agendar sua consulta pelo WhatsApp clicando no botão de agendamento em nosso '
            'site, ou ligando diretamente para a clínica. Também aceitamos agendamentos presenciais na recepção.'
        ),
    },
    {
        'question': 'Quais convênios são aceitos?',
        'answer': (
            'Trabalhamos com os principais planos de saúde. Consulte a lista completa na seção de convênios.'
        ),
    },
    {
        'question': 'Qual o horário de funcionamento da clínica?',
        'answer': (
            'Funcionamos de segunda a sexta-feira das 7h às 19h e aos sábados das 7h às 13h. '
            'O laboratório abre a partir das 6h30 para coleta de exames em jejum.'
        ),
    },
    {
        'question': 'Preciso de encaminhamento para consultar um especialista?',
        'answer': (
            'Não é necessário encaminhamento para consultas particulares. Para atendimentos por convênio, '
            'verifique as regras do seu plano: alguns exigem guia de referência do médico assistente.'
        ),
    },
    {
        'question': 'Em quanto tempo recebo os resultados dos exames?',
        'answer': (
            'A maioria dos exames laboratoriais tem resultado em até 24 horas úteis. Exames mais complexos '
            'podem levar de 3 a 7 dias. Você receberá os resultados por e-mail ou poderá retirá-los na clínica.'
        ),
    },
]

TESTIMONIALS = [
    {
        'quote': (
            'Atendimento excelente e muito humanizado. Me senti acolhida desde a recepção até a consulta. '
            'Recomendo de olhos fechados!'
        ),
        'patient_initials': 'M.S.',
        'specialty': 'Cardiologia',
        'rating': 5,
    },
    {
        'quote': (
            'Resultados dos exames rápidos e equipe muito atenciosa. O laboratório é organizado e o '
            'ambiente é muito limpo.'
        ),
        'patient_initials': 'J.P.',
        'specialty': 'Laboratório',
        'rating': 5,
    },
    {
        'quote': 'Médicos competentes e ambiente muito confortável. A clínica é moderna e o atendimento é pontual.',
        'patient_initials': 'A.L.',
        'specialty': 'Ortopedia',
        'rating': 5,
    },
    {
        'quote': (
            'Fiz meu check-up completo aqui e fiquei impressionada com a agilidade. '
            'Tudo resolvido em um único lugar.'
        ),
        'patient_initials': 'R.C.',
        'specialty': 'Clínico Geral',
        'rating': 5,
    },
    {
        'quote': 'Profissionais atenciosos e muito bem preparados. Me senti segura durante todo o procedimento.',
        'patient_initials': 'L.M.',
        'specialty': 'Dermatologia',
        'rating': 5,
    },
]

CONVENIOS = [
    {'name': 'Bradesco Saúde', 'logo_url': ''},
    {'name': 'Vale', 'logo_url': ''},
]

INSTITUTES = [
    {
        'slug': 'cardiologia',
        'name': 'Instituto de Cardiologia',
        'category': 'Excelência em Cuidado',
        'description': (
            'Diagnóstico e tratamento de doenças cardiovasculares com tecnologia de ponta '
            'e equipe altamente qualificada.'
        ),
        'icon': 'Heart',
        'services': ['Ecocardiograma', 'Teste Ergométrico', 'Holter 24h', 'MAPA', 'Cateterismo'],
        'doctors': ['dr-carlos-mendes', 'dra-ana-lima'],
    },
    {
        'slug': 'ortopedia',
        'name': 'Instituto de Ortopedia',
        'category': 'Estrutura Completa',
        'description': 'Tratamento especializado em lesões musculoesqueléticas, coluna e medicina esportiva.',
        'icon': 'Bone',
        'services': ['Artroscopia', 'Prótese de Quadril', 'Tratamento de Coluna', 'Medicina Esportiva', 'Fisioterapia'],
        'doctors': ['dr-roberto-silva', 'dra-marina-costa'],
    },
    {
        'slug': 'dermatologia',
        'name': 'Instituto de Dermatologia',
        'category': 'Cuidados Especiais',
        'description': 'Cuidados completos com a saúde da pele, cabelos e unhas com abordagem personalizada.',
        'icon': 'Sparkles',
        'services': ['Dermatoscopia', 'Laser Dermatológico', 'Peeling', 'Biópsia de Pele', 'Tricologia'],
        'doctors': ['dra-juliana-santos'],
    },
    {
        'slug': 'oftalmologia',
        'name': 'Instituto de Oftalmologia',
        'category': 'Alta Precisão',
        'description': (
            'Visão é nosso foco. Diagnóstico e cirurgias oculares com a mais alta precisão e tecnologia.'
        ),
        'icon': 'Eye',
        'services': ['Cirurgia de Catarata', 'Tratamento de Glaucoma', 'Retina', 'Refração', 'Lentes de Contato'],
        'doctors': ['dr-fernando-alves'],
    },
    {
        'slug': 'laboratorio',
        'name': 'Exames Laboratoriais',
        'category': 'Agilidade para Você',
        'description': 'Resultados rápidos e precisos. Coleta de exames em ambiente confortável e acolhedor.',
        'icon': 'TestTube',
        'services': ['Hemograma', 'Glicemia', 'Colesterol', 'Função Renal', 'Hormônios'],
        'doctors': [],
    },
]

DOCTORS = [
    {
        'slug': 'dr-carlos-mendes',
        'name': 'Dr. Carlos Mendes',
        'specialty': 'Cardiologista',
        'license': 'CRM/SP 123456',
        'bio': (
            'Formado pela USP com residência no InCor. Mais de 20 anos de experiência em cardiologia '
            'clínica e intervencionista. Membro titular da Sociedade Brasileira de Cardiologia.'
        ),
        'institute': 'cardiologia',
    },
    {
        'slug': 'dra-ana-lima',
        'name': 'Dra. Ana Lima',
        'specialty': 'Cardiologista Pediátrica',
        'license': 'CRM/SP 234567',
        'bio': (
            'Especialista em cardiopatias congênitas pela Unicamp. Atua com ecocardiografia fetal e '
            'acompanhamento de crianças com doenças cardíacas.'
        ),
        'institute': 'cardiologia',
    },
    {
        'slug': 'dr-roberto-silva',
        'name': 'Dr. Roberto Silva',
        'specialty': 'Ortopedista - Coluna',
        'license': 'CRM/SP 345678',
        'bio': (
            'Fellow em cirurgia de coluna pela Cleveland Clinic (EUA). Referência em tratamentos '
            'minimamente invasivos para hérnia de disco e estenose.'
        ),
        'institute': 'ortopedia',
    },
    {
        'slug': 'dra-marina-costa',
        'name': 'Dra. Marina Costa',
        'specialty': 'Ortopedista - Medicina Esportiva',
        'license': 'CRM/SP 456789',
        'bio': (
            'Médica da Seleção Brasileira de Vôlei. Especialista em lesões esportivas e reabilitação '
            'de atletas de alto rendimento.'
        ),
        'institute': 'ortopedia',
    },
    {
        'slug': 'dra-juliana-santos',
        'name': 'Dra. Juliana Santos',
        'specialty': 'Dermatologista',
        'license': 'CRM/SP 567890',
        'bio': (
            'Mestre em Dermatologia pela UNIFESP. Especialista em dermatologia clínica e estética, '
            'com foco em tratamentos a laser e rejuvenescimento.'
        ),
        'institute': 'dermatologia',
    },
    {
        'slug': 'dr-fernando-alves',
        'name': 'Dr. Fernando Alves',
        'specialty': 'Oftalmologista',
        'license': 'CRM/SP 678901',
        'bio': (
            'PhD em Oftalmologia pela USP. Especialista em cirurgia refrativa e catarata. '
            'Pioneiro em técnicas de cirurgia a laser no Brasil.'
        ),
        'institute': 'oftalmologia',
    },
]

BOOKING_MESSAGE = 'Olá! Gostaria de agendar uma consulta.'


def whatsapp_link(message, number=None):
    return f"https://wa.me/{number or WHATSAPP_NUMBER}?text={quote(message, safe='')}"
